"""Coin price ingest exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class CoinPriceError(Exception):
    """Base exception for all coin price ingest failures."""


class IngestConfigError(CoinPriceError):
    """Raised for invalid or missing runtime configuration."""


class SourceEventError(CoinPriceError):
    """Raised when a trigger payload lacks a bucket or key."""


class SourceUnavailableError(CoinPriceError):
    """Raised when a source object cannot be fetched or listed."""


class InvalidSourceKeyError(CoinPriceError):
    """Raised when a source key has no parsable date or series segment."""


class MalformedRecordError(CoinPriceError):
    """Raised for one price row with an unparsable numeric field."""

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class StoreWriteError(CoinPriceError):
    """Raised when the keyed store rejects a price record."""
