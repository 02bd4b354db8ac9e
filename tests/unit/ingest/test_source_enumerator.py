"""Unit tests for source key enumeration."""

from __future__ import annotations

from core.types import ObjectPage
from ingest.source_enumerator import list_source_keys
from tests.fake_stores import FakeObjectStore


def test_list_source_keys_follows_continuation_tokens() -> None:
    """Pages should be concatenated in order, minus the series list file."""
    store = FakeObjectStore(
        pages=[
            ObjectPage(keys=("2024-01-31/a.csv", "serieslist.json"), next_token="t-1"),
            ObjectPage(keys=("2024-01-31/b.csv",), next_token=None),
        ]
    )

    listing = list_source_keys(store, "coin-price-files")

    assert listing.ok is True
    assert listing.keys == ("2024-01-31/a.csv", "2024-01-31/b.csv")
    assert store.list_calls == [None, "t-1"]


def test_list_source_keys_returns_empty_failed_listing_on_error() -> None:
    """A failure on a later page should discard earlier pages."""
    store = FakeObjectStore(
        pages=[ObjectPage(keys=("2024-01-31/a.csv",), next_token="t-1")],
        fail_listing_on_page=1,
    )

    listing = list_source_keys(store, "coin-price-files")

    assert listing.keys == () and listing.ok is False


def test_list_source_keys_reports_empty_bucket_as_ok() -> None:
    """A genuinely empty bucket should be distinguishable from a failure."""
    store = FakeObjectStore(pages=[ObjectPage(keys=())])

    listing = list_source_keys(store, "coin-price-files")

    assert listing.keys == () and listing.ok is True
