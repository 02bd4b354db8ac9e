"""Unit tests for composite key and source key derivation."""

from __future__ import annotations

from datetime import date

import pytest

from core.errors import InvalidSourceKeyError
from core.price_keys import (
    derive_as_of_date,
    derive_composite_key,
    format_as_of_date,
    parse_source_key,
    split_composite_key,
)
from core.types import IssueRecord


def test_composite_key_omits_missing_variety() -> None:
    """Issues without a variety should use the two-segment form."""
    issue = IssueRecord(name="1909-S VDB", variety=None)

    assert derive_composite_key("lincoln-cents", issue) == "lincoln-cents|1909-S VDB"


def test_composite_key_collapses_empty_and_absent_variety() -> None:
    """Empty and absent variety should produce the same key."""
    absent = IssueRecord(name="1914-D", variety=None)
    empty = IssueRecord(name="1914-D", variety="")

    assert derive_composite_key("s", absent) == derive_composite_key("s", empty)


def test_composite_key_appends_variety() -> None:
    """A non-empty variety should be the third segment."""
    issue = IssueRecord(name="1922 No D", variety="Strong Reverse")

    assert derive_composite_key("lincoln-cents", issue) == "lincoln-cents|1922 No D|Strong Reverse"


@pytest.mark.parametrize(
    ("first", "second"),
    [
        (("a", "b", None), ("a", "c", None)),
        (("a", "b", None), ("x", "b", None)),
        (("a", "b", "v1"), ("a", "b", "v2")),
        (("a", "b", "c"), ("a", "b|c", None)),
        (("a|b", "c", None), ("a", "b|c", None)),
    ],
)
def test_composite_key_is_injective(first: tuple, second: tuple) -> None:
    """Distinct triples should never share a key, even with separators in values."""
    first_key = derive_composite_key(first[0], IssueRecord(name=first[1], variety=first[2]))
    second_key = derive_composite_key(second[0], IssueRecord(name=second[1], variety=second[2]))

    assert first_key != second_key


def test_split_composite_key_reverses_escaping() -> None:
    """Escaped separators should split back into the original segments."""
    issue = IssueRecord(name="Type 1|Type 2", variety="back\\slash")

    key = derive_composite_key("mixed", issue)

    assert split_composite_key(key) == ["mixed", "Type 1|Type 2", "back\\slash"]


def test_parse_source_key_extracts_series_and_date() -> None:
    """Dated prefix and file stem should become the snapshot identity."""
    parts = parse_source_key("2024-01-31/lincoln-cents.csv")

    assert (parts.series_name, parts.as_of_date) == ("lincoln-cents", date(2024, 1, 31))


@pytest.mark.parametrize(
    "source_key",
    [
        "lincoln-cents.csv",
        "not-a-date/lincoln-cents.csv",
        "2024-02-30/lincoln-cents.csv",
        "2024-01-31/.csv",
        "2024-01-31/lincoln-cents.json",
        "archive/2024-01-31/lincoln-cents.csv",
        "serieslist.json",
    ],
)
def test_parse_source_key_rejects_invalid_keys(source_key: str) -> None:
    """Keys without a valid date or series segment should fail."""
    with pytest.raises(InvalidSourceKeyError):
        parse_source_key(source_key)


def test_as_of_date_formats_zero_padded() -> None:
    """Stored dates should always be zero-padded ISO dates."""
    as_of_date = derive_as_of_date("2024-3-5/buffalo-nickels.csv")

    assert format_as_of_date(as_of_date) == "2024-03-05"
