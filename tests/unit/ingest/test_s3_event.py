"""Unit tests for S3 notification parsing."""

from __future__ import annotations

import pytest

from core.errors import SourceEventError
from core.types import SourceLocation
from ingest.s3_event import parse_s3_event


def _event(*keys: str) -> dict:
    return {
        "Records": [
            {"s3": {"bucket": {"name": "coin-price-files"}, "object": {"key": key}}}
            for key in keys
        ]
    }


def test_parse_s3_event_decodes_keys() -> None:
    """Plus signs and percent escapes should decode to the real key."""
    locations = parse_s3_event(_event("2024-01-31/morgan+dollars%2Bcc.csv"))

    assert locations == [
        SourceLocation(bucket="coin-price-files", key="2024-01-31/morgan dollars+cc.csv")
    ]


def test_parse_s3_event_returns_every_record() -> None:
    """Every record in a batch notification should be processed."""
    locations = parse_s3_event(_event("2024-01-31/a.csv", "2024-01-31/b.csv"))

    assert [location.key for location in locations] == ["2024-01-31/a.csv", "2024-01-31/b.csv"]


@pytest.mark.parametrize(
    "event",
    [
        {},
        {"Records": []},
        {"Records": [{"s3": {"bucket": {"name": "b"}}}]},
        {"Records": [{"eventName": "ObjectCreated:Put"}]},
    ],
)
def test_parse_s3_event_rejects_incomplete_payloads(event: dict) -> None:
    """Events without a bucket and key should fail clearly."""
    with pytest.raises(SourceEventError):
        parse_s3_event(event)
