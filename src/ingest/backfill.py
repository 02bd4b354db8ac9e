"""Bucket-wide backfill.

This module re-ingests every source key in a bucket. Reprocessing is
idempotent, so backfill also reconciles records lost to write errors.
"""

from __future__ import annotations

from core.errors import InvalidSourceKeyError, SourceUnavailableError
from core.logging_config import get_logger
from core.types import BackfillResult, IngestResult
from ingest.pipeline import PriceIngestRunner
from ingest.source_enumerator import list_source_keys

_LOGGER = get_logger(__name__)


def backfill_bucket(runner: PriceIngestRunner, bucket: str) -> BackfillResult:
    """Ingest every source key currently in a bucket.

    Args:
        runner: Ingest runner with object and price stores.
        bucket: Source bucket name.

    Returns:
        Results per processed key and keys that were skipped.
    """
    listing = list_source_keys(runner.object_store, bucket)
    if not listing.ok:
        return BackfillResult(bucket=bucket, listing_ok=False)
    results: list[IngestResult] = []
    skipped_keys: list[str] = []
    for key in listing.keys:
        try:
            results.append(runner.ingest(bucket, key))
        except (InvalidSourceKeyError, SourceUnavailableError) as error:
            _LOGGER.warning("backfill_key_skipped", bucket=bucket, key=key, error=str(error))
            skipped_keys.append(key)
    _LOGGER.info(
        "backfill_completed",
        bucket=bucket,
        keys_processed=len(results),
        keys_skipped=len(skipped_keys),
    )
    return BackfillResult(
        bucket=bucket,
        listing_ok=True,
        results=tuple(results),
        skipped_keys=tuple(skipped_keys),
    )
