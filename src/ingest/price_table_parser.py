"""Pricing table parser.

This module turns one pricing CSV body into typed issue records.
Rows with unparsable numbers are rejected individually.
"""

from __future__ import annotations

import re

from core.constants import CSV_DELIMITER, FIXED_COLUMN_COUNT
from core.errors import MalformedRecordError
from core.types import IssueRecord, MalformedRow, PriceObservation, PriceTableParseResult

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")


def parse_price_table(raw_text: str) -> PriceTableParseResult:
    """Parse a pricing file into issue records.

    The header is ``name,variety,<grade>,...``. Each later non-empty row
    with at least as many columns as the header becomes one issue. Short
    rows are skipped silently.

    Args:
        raw_text: Full file body.

    Returns:
        Accepted issues in input order plus rejected rows.
    """
    lines = raw_text.split("\n")
    header = lines[0].split(CSV_DELIMITER)
    issues: list[IssueRecord] = []
    malformed_rows: list[MalformedRow] = []
    for line_number, line in enumerate(lines[1:], 2):
        if not line.strip():
            continue
        columns = line.split(CSV_DELIMITER)
        if len(columns) < len(header):
            continue
        try:
            issues.append(_parse_issue_row(header, columns, line_number))
        except MalformedRecordError as error:
            malformed_rows.append(
                MalformedRow(
                    line_number=line_number,
                    raw_line=line,
                    reason=str(error),
                    issue_name=columns[0],
                )
            )
    return PriceTableParseResult(issues=tuple(issues), malformed_rows=tuple(malformed_rows))


def parse_issues(raw_text: str) -> list[IssueRecord]:
    """Return only the accepted issues of a pricing file."""
    return list(parse_price_table(raw_text).issues)


def _parse_issue_row(header: list[str], columns: list[str], line_number: int) -> IssueRecord:
    """Build one issue from a split row.

    Args:
        header: Split header labels.
        columns: Split row cells, at least as many as the header.
        line_number: One-based line number for error context.

    Returns:
        Parsed issue record.

    Raises:
        MalformedRecordError: If a grade label or price is not an integer.
    """
    prices: list[PriceObservation] = []
    for index in range(FIXED_COLUMN_COUNT, len(columns)):
        if index >= len(header):
            raise MalformedRecordError(
                f"Row {line_number} has price column {index + 1} with no grade in the header.",
                line_number,
            )
        grade = _parse_integer(header[index], "grade label", line_number)
        price = _parse_integer(columns[index], f"price for grade {header[index].strip()}", line_number)
        prices.append(PriceObservation(grade=grade, price=price))
    return IssueRecord(name=columns[0], variety=columns[1], prices=tuple(prices))


def _parse_integer(raw_value: str, field_name: str, line_number: int) -> int:
    value = raw_value.strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        raise MalformedRecordError(
            f"Row {line_number} has non-numeric {field_name}: '{value}'.",
            line_number,
        )
    return int(value, 10)
