"""Object store notification parsing.

This module extracts source locations from S3 event payloads.
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import unquote_plus

from core.errors import SourceEventError
from core.types import SourceLocation


def parse_s3_event(event: Mapping[str, Any]) -> list[SourceLocation]:
    """Return the bucket/key pair of every record in an S3 event.

    Keys arrive URL-encoded with ``+`` for spaces.

    Args:
        event: S3 notification payload.

    Returns:
        Source locations in record order.

    Raises:
        SourceEventError: If the payload has no records or a record
            lacks a bucket name or object key.
    """
    records = event.get("Records")
    if not records:
        raise SourceEventError(
            "Invalid S3 event: no Records entries. "
            "Trigger ingest from an S3 object-created notification."
        )
    return [_parse_record(index, record) for index, record in enumerate(records)]


def _parse_record(index: int, record: Mapping[str, Any]) -> SourceLocation:
    try:
        bucket = record["s3"]["bucket"]["name"]
        raw_key = record["s3"]["object"]["key"]
    except (KeyError, TypeError) as error:
        raise SourceEventError(
            f"Invalid S3 event record {index}: missing {error}. "
            "Expected s3.bucket.name and s3.object.key."
        ) from error
    return SourceLocation(bucket=bucket, key=unquote_plus(raw_key))
