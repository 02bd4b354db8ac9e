"""Source key enumeration for backfill and reconciliation.

This module pages through the source bucket and returns every
candidate pricing key, or a failed listing with no keys at all.
"""

from __future__ import annotations

from core.constants import SERIES_LIST_KEY
from core.logging_config import get_logger
from core.types import SourceListing
from store.object_store import ObjectStore

_LOGGER = get_logger(__name__)


def list_source_keys(object_store: ObjectStore, bucket: str) -> SourceListing:
    """List all source keys in a bucket, excluding the series list file.

    A failure on any page discards keys gathered so far, so callers
    never process a truncated listing.

    Args:
        object_store: Object store collaborator.
        bucket: Source bucket name.

    Returns:
        ``SourceListing`` with ``ok=False`` and no keys on error.
    """
    keys: list[str] = []
    continuation_token: str | None = None
    page_count = 0
    try:
        while True:
            page = object_store.list_page(bucket, continuation_token)
            page_count += 1
            keys.extend(page.keys)
            if not page.next_token:
                break
            continuation_token = page.next_token
    except Exception as error:
        _LOGGER.error(
            "source_listing_failed",
            bucket=bucket,
            pages_read=page_count,
            error=str(error),
        )
        return SourceListing(keys=(), ok=False)
    source_keys = tuple(key for key in keys if key != SERIES_LIST_KEY)
    _LOGGER.info(
        "source_listing_completed",
        bucket=bucket,
        pages_read=page_count,
        key_count=len(source_keys),
    )
    return SourceListing(keys=source_keys, ok=True)
