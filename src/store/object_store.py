"""S3-backed object store collaborator.

This module wraps the boto3 S3 client calls the pipeline needs:
reading one object body and listing one page of keys.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.config import IngestConfig
from core.errors import SourceUnavailableError
from core.types import ObjectPage
from store.aws_session import build_session


class ObjectStore(Protocol):
    """Read-only object store interface used by ingest."""

    def get_text(self, bucket: str, key: str) -> str:
        ...

    def list_page(self, bucket: str, continuation_token: str | None = None) -> ObjectPage:
        ...


class S3ObjectStore:
    """Object store backed by a boto3 S3 client."""

    def __init__(self, s3_client: Any) -> None:
        self._client = s3_client

    def get_text(self, bucket: str, key: str) -> str:
        """Download an object and decode it as UTF-8.

        Args:
            bucket: S3 bucket name.
            key: Object key.

        Returns:
            Object body text.

        Raises:
            SourceUnavailableError: If the object cannot be read or decoded.
        """
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read().decode("utf-8")
        except Exception as error:
            raise SourceUnavailableError(
                f"Failed to read s3://{bucket}/{key}: {error}. "
                "Check the object exists and the bucket is in the configured region."
            ) from error

    def list_page(self, bucket: str, continuation_token: str | None = None) -> ObjectPage:
        """List one page of object keys.

        Args:
            bucket: S3 bucket name.
            continuation_token: Token from the previous page, if any.

        Returns:
            Keys on this page and the next continuation token.

        Raises:
            SourceUnavailableError: If the listing request fails.
        """
        params: dict[str, str] = {"Bucket": bucket}
        if continuation_token:
            params["ContinuationToken"] = continuation_token
        try:
            response = self._client.list_objects_v2(**params)
        except Exception as error:
            raise SourceUnavailableError(
                f"Failed to list s3://{bucket}: {error}. "
                "Check AWS credentials and bucket permissions."
            ) from error
        keys = tuple(obj["Key"] for obj in response.get("Contents", []))
        return ObjectPage(keys=keys, next_token=response.get("NextContinuationToken"))


def create_s3_client(config: IngestConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing region and optional profile.

    Returns:
        Boto3 S3 client.
    """
    return build_session(config).client("s3")


def create_object_store(config: IngestConfig) -> S3ObjectStore:
    """Create the S3 object store for the configured session."""
    return S3ObjectStore(create_s3_client(config))
