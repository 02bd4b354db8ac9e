"""Runtime configuration model for coin price ingest.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_AWS_REGION
from core.errors import IngestConfigError


@dataclass(frozen=True)
class IngestConfig:
    """Validated runtime configuration.

    Attributes:
        table_name: DynamoDB table receiving price records.
        source_bucket: S3 bucket holding pricing snapshots.
        region: AWS region for S3 and DynamoDB clients.
        profile: Optional AWS profile for boto3 session initialization.
    """

    table_name: str | None
    source_bucket: str | None
    region: str = DEFAULT_AWS_REGION
    profile: str | None = None

    @classmethod
    def from_env(cls) -> "IngestConfig":
        """Build config from process environment variables.

        Returns:
            A config object. Missing targets are validated on use.
        """
        return cls(
            table_name=_read_optional("DYNAMODB_TABLE"),
            source_bucket=_read_optional("S3_BUCKET"),
            region=_read_optional("AWS_REGION") or DEFAULT_AWS_REGION,
            profile=_read_optional("AWS_PROFILE"),
        )

    def require_table_name(self) -> str:
        """Return the target table name.

        Raises:
            IngestConfigError: If no table is configured.
        """
        if not self.table_name:
            raise IngestConfigError(
                "Missing DYNAMODB_TABLE: no target table configured. "
                "Set DYNAMODB_TABLE or pass --table."
            )
        return self.table_name

    def require_source_bucket(self) -> str:
        """Return the source bucket name.

        Raises:
            IngestConfigError: If no bucket is configured.
        """
        if not self.source_bucket:
            raise IngestConfigError(
                "Missing S3_BUCKET: no source bucket configured. "
                "Set S3_BUCKET or pass --bucket."
            )
        return self.source_bucket


def _read_optional(name: str) -> str | None:
    """Read an environment value, treating blank strings as unset."""
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    return raw_value.strip()
