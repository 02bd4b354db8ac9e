"""Object-created notification entry point.

This module is the function handler invoked for each S3 notification.
It resolves configuration once per process and ingests every record.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.config import IngestConfig
from core.logging_config import get_logger
from ingest.pipeline import PriceIngestRunner
from ingest.s3_event import parse_s3_event

_LOGGER = get_logger(__name__)
_RUNNER: PriceIngestRunner | None = None


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Ingest every source object named in an S3 event.

    Args:
        event: S3 notification payload.
        context: Invocation context, unused.

    Returns:
        JSON-serializable summary with one entry per source object.

    Raises:
        SourceEventError: If the event has no usable records.
        InvalidSourceKeyError: If a key has no date or series.
        SourceUnavailableError: If a source object cannot be fetched.
    """
    locations = parse_s3_event(event)
    _LOGGER.info("source_event_received", record_count=len(locations))
    runner = _get_runner()
    results = [runner.ingest(location.bucket, location.key) for location in locations]
    return {"results": [result.to_summary() for result in results]}


def _get_runner() -> PriceIngestRunner:
    global _RUNNER
    if _RUNNER is None:
        _RUNNER = PriceIngestRunner.from_config(IngestConfig.from_env())
    return _RUNNER
