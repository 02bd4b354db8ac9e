"""Shared typed models.

This module defines immutable data models used by the parser, key
derivation, ingest pipeline, and store layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import json
from typing import Mapping

from core.constants import ITEM_DATE_FIELD, ITEM_KEY_FIELD, ITEM_PRICES_FIELD


@dataclass(frozen=True)
class PriceObservation:
    """One grade/price pair from a pricing row.

    Attributes:
        grade: Numeric coin condition grade.
        price: Price in the smallest currency unit.
    """

    grade: int
    price: int


@dataclass(frozen=True)
class IssueRecord:
    """Parsed pricing row for one coin issue.

    Attributes:
        name: Issue name, e.g. ``1909-S VDB``.
        variety: Optional variety label; empty when the column is blank.
        prices: Observations in column order, duplicates kept.
    """

    name: str
    variety: str | None
    prices: tuple[PriceObservation, ...] = ()

    def price_map(self) -> dict[str, int]:
        """Return grade to price mapping; later duplicate grades win."""
        mapping: dict[str, int] = {}
        for observation in self.prices:
            mapping[str(observation.grade)] = observation.price
        return mapping


@dataclass(frozen=True)
class SeriesSnapshot:
    """All issues of one series as of one date, from one source file."""

    series_name: str
    as_of_date: date
    issues: tuple[IssueRecord, ...]


@dataclass(frozen=True)
class SourceKeyParts:
    """Series and snapshot date encoded in a source object key."""

    series_name: str
    as_of_date: date


@dataclass(frozen=True)
class SourceLocation:
    """Object store location of one source file."""

    bucket: str
    key: str


@dataclass(frozen=True)
class StoredPriceRecord:
    """Persisted price record keyed by composite key and snapshot date.

    Attributes:
        composite_key: Stable series/issue/variety identity.
        as_of_date: Snapshot date as ``YYYY-MM-DD``.
        price_map: Grade string to price mapping.
    """

    composite_key: str
    as_of_date: str
    price_map: Mapping[str, int] = field(default_factory=dict)

    def to_item(self) -> dict[str, str]:
        """Render the keyed-store item payload."""
        return {
            ITEM_KEY_FIELD: self.composite_key,
            ITEM_DATE_FIELD: self.as_of_date,
            ITEM_PRICES_FIELD: json.dumps(_sorted_by_grade(self.price_map)),
        }


@dataclass(frozen=True)
class MalformedRow:
    """A price row rejected because a numeric field failed to parse.

    Attributes:
        line_number: One-based line number within the source file.
        raw_line: Original row text.
        reason: Human-readable parse failure.
        issue_name: Name column of the rejected row.
    """

    line_number: int
    raw_line: str
    reason: str
    issue_name: str = ""


@dataclass(frozen=True)
class PriceTableParseResult:
    """Parser output: accepted issues and rejected rows."""

    issues: tuple[IssueRecord, ...]
    malformed_rows: tuple[MalformedRow, ...] = ()


@dataclass(frozen=True)
class ObjectPage:
    """One page of an object store listing."""

    keys: tuple[str, ...]
    next_token: str | None = None


@dataclass(frozen=True)
class SourceListing:
    """Enumeration result.

    Attributes:
        keys: Candidate source keys in listing order.
        ok: False when listing failed; keys is then always empty.
    """

    keys: tuple[str, ...]
    ok: bool


@dataclass(frozen=True)
class RecordOutcome:
    """Write outcome for one parsed issue."""

    composite_key: str
    issue_name: str
    variety: str | None
    stored: bool
    error: str | None = None


@dataclass(frozen=True)
class IngestResult:
    """Summary of one source object ingestion.

    Attributes:
        bucket: Source bucket.
        key: Source object key.
        series_name: Series derived from the key.
        as_of_date: Snapshot date derived from the key.
        outcomes: Per-issue write outcomes in input order.
        malformed_rows: Rows skipped for numeric parse failures.
    """

    bucket: str
    key: str
    series_name: str
    as_of_date: date
    outcomes: tuple[RecordOutcome, ...]
    malformed_rows: tuple[MalformedRow, ...] = ()

    @property
    def stored_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.stored)

    @property
    def failed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.stored)

    @property
    def status(self) -> str:
        """Return ``success``, ``partial_success`` or ``failed``."""
        if self.failed_count == 0 and not self.malformed_rows:
            return "success"
        if self.stored_count == 0 and self.outcomes:
            return "failed"
        return "partial_success"

    def to_summary(self) -> dict[str, object]:
        """Render a JSON-serializable summary."""
        return {
            "bucket": self.bucket,
            "key": self.key,
            "series_name": self.series_name,
            "as_of_date": self.as_of_date.isoformat(),
            "status": self.status,
            "records_stored": self.stored_count,
            "records_failed": self.failed_count,
            "rows_malformed": len(self.malformed_rows),
        }


@dataclass(frozen=True)
class BackfillResult:
    """Summary of a bucket-wide reconciliation run.

    Attributes:
        bucket: Source bucket.
        listing_ok: False when enumeration failed and nothing ran.
        results: Ingest results for keys that were processed.
        skipped_keys: Keys aborted by key or fetch errors.
    """

    bucket: str
    listing_ok: bool
    results: tuple[IngestResult, ...] = ()
    skipped_keys: tuple[str, ...] = ()


def _sorted_by_grade(price_map: Mapping[str, int]) -> dict[str, int]:
    """Order grades ascending numerically, as integer-keyed JSON objects serialize."""
    return {grade: price_map[grade] for grade in sorted(price_map, key=int)}
