"""Ingest orchestration for pricing snapshots.

This module coordinates fetch, parse, key derivation, and per-record
upserts for one source object. Record write failures are isolated.
"""

from __future__ import annotations

from datetime import date

from core.config import IngestConfig
from core.logging_config import get_logger
from core.price_keys import derive_composite_key, format_as_of_date, parse_source_key
from core.types import (
    IngestResult,
    IssueRecord,
    MalformedRow,
    RecordOutcome,
    SeriesSnapshot,
    StoredPriceRecord,
)
from ingest.price_table_parser import parse_price_table
from store.object_store import ObjectStore, create_object_store
from store.price_store import PriceStore, create_price_store

_LOGGER = get_logger(__name__)


class PriceIngestRunner:
    """Runner that ingests pricing files into the price store."""

    def __init__(self, object_store: ObjectStore, price_store: PriceStore) -> None:
        self._object_store = object_store
        self._price_store = price_store

    @classmethod
    def from_config(cls, config: IngestConfig) -> "PriceIngestRunner":
        """Build a runner with boto3-backed collaborators."""
        return cls(create_object_store(config), create_price_store(config))

    @property
    def object_store(self) -> ObjectStore:
        return self._object_store

    def ingest(self, bucket: str, key: str) -> IngestResult:
        """Ingest one pricing file.

        Args:
            bucket: Source bucket name.
            key: Source key ``<YYYY-MM-DD>/<series>.csv``.

        Returns:
            Per-record outcomes and rejected rows.

        Raises:
            InvalidSourceKeyError: If the key has no date or series.
            SourceUnavailableError: If the object cannot be fetched.
        """
        key_parts = parse_source_key(key)
        _LOGGER.info(
            "price_ingest_started",
            bucket=bucket,
            key=key,
            series_name=key_parts.series_name,
            as_of_date=format_as_of_date(key_parts.as_of_date),
        )
        raw_text = self._object_store.get_text(bucket, key)
        parse_result = parse_price_table(raw_text)
        snapshot = SeriesSnapshot(
            series_name=key_parts.series_name,
            as_of_date=key_parts.as_of_date,
            issues=parse_result.issues,
        )
        _log_malformed_rows(key, snapshot, parse_result.malformed_rows)
        outcomes = tuple(
            self._write_issue(snapshot.series_name, snapshot.as_of_date, issue)
            for issue in snapshot.issues
        )
        result = IngestResult(
            bucket=bucket,
            key=key,
            series_name=key_parts.series_name,
            as_of_date=key_parts.as_of_date,
            outcomes=outcomes,
            malformed_rows=parse_result.malformed_rows,
        )
        _LOGGER.info("price_ingest_completed", **result.to_summary())
        return result

    def _write_issue(self, series_name: str, as_of_date: date, issue: IssueRecord) -> RecordOutcome:
        composite_key = derive_composite_key(series_name, issue)
        record = StoredPriceRecord(
            composite_key=composite_key,
            as_of_date=format_as_of_date(as_of_date),
            price_map=issue.price_map(),
        )
        try:
            self._price_store.put(record)
        except Exception as error:
            _LOGGER.error(
                "price_record_write_failed",
                series_name=series_name,
                as_of_date=record.as_of_date,
                issue_name=issue.name,
                variety=issue.variety,
                composite_key=composite_key,
                error=str(error),
            )
            return RecordOutcome(
                composite_key=composite_key,
                issue_name=issue.name,
                variety=issue.variety,
                stored=False,
                error=str(error),
            )
        return RecordOutcome(
            composite_key=composite_key,
            issue_name=issue.name,
            variety=issue.variety,
            stored=True,
        )


def ingest_source_object(bucket: str, key: str, config: IngestConfig) -> IngestResult:
    """Ingest one pricing file with collaborators built from config.

    Args:
        bucket: Source bucket name.
        key: Source object key.
        config: Runtime configuration.

    Returns:
        Ingest result for the object.

    Raises:
        IngestConfigError: If no target table is configured.
        InvalidSourceKeyError: If the key cannot be parsed.
        SourceUnavailableError: If the object cannot be fetched.
    """
    return PriceIngestRunner.from_config(config).ingest(bucket, key)


def _log_malformed_rows(
    key: str,
    snapshot: SeriesSnapshot,
    rows: tuple[MalformedRow, ...],
) -> None:
    for row in rows:
        _LOGGER.warning(
            "malformed_price_row",
            key=key,
            series_name=snapshot.series_name,
            as_of_date=format_as_of_date(snapshot.as_of_date),
            issue_name=row.issue_name,
            line_number=row.line_number,
            raw_line=row.raw_line,
            reason=row.reason,
        )
