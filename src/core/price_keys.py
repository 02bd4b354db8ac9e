"""Composite key and snapshot date derivation.

This module centralizes identity rules for stored price records.
It keeps key encoding consistent between writers and readers.
"""

from __future__ import annotations

from datetime import date, datetime

from core.constants import (
    KEY_ESCAPE,
    KEY_SEPARATOR,
    SOURCE_DATE_FORMAT,
    SOURCE_KEY_SUFFIX,
)
from core.errors import InvalidSourceKeyError
from core.types import IssueRecord, SourceKeyParts


def derive_composite_key(series_name: str, issue: IssueRecord) -> str:
    """Build the stable identity string for one issue.

    Args:
        series_name: Series the issue belongs to.
        issue: Parsed issue record.

    Returns:
        ``series|name`` or ``series|name|variety``. Segments containing
        the separator or escape character are backslash-escaped.
    """
    segments = [series_name, issue.name]
    if issue.variety:
        segments.append(issue.variety)
    return KEY_SEPARATOR.join(_escape_segment(segment) for segment in segments)


def split_composite_key(composite_key: str) -> list[str]:
    """Split a composite key back into its unescaped segments.

    Args:
        composite_key: Key produced by ``derive_composite_key``.

    Returns:
        Series, name, and optional variety segments.
    """
    segments: list[str] = []
    current: list[str] = []
    escaped = False
    for char in composite_key:
        if escaped:
            current.append(char)
            escaped = False
        elif char == KEY_ESCAPE:
            escaped = True
        elif char == KEY_SEPARATOR:
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return segments


def parse_source_key(source_key: str) -> SourceKeyParts:
    """Parse ``<YYYY-MM-DD>/<series>.csv`` into series and date.

    Args:
        source_key: Object store key of a pricing file.

    Returns:
        Parsed series name and snapshot date.

    Raises:
        InvalidSourceKeyError: If either segment is missing or unparsable.
    """
    segments = source_key.split("/")
    if len(segments) != 2:
        _raise_key_error(source_key, "expected exactly one '/' between date and file name")
    date_segment, file_segment = segments
    if not file_segment.endswith(SOURCE_KEY_SUFFIX):
        _raise_key_error(source_key, f"file name must end with '{SOURCE_KEY_SUFFIX}'")
    series_name = file_segment[: -len(SOURCE_KEY_SUFFIX)]
    if not series_name:
        _raise_key_error(source_key, "series name is empty")
    return SourceKeyParts(series_name=series_name, as_of_date=_parse_date(source_key, date_segment))


def derive_as_of_date(source_key: str) -> date:
    """Return the snapshot date encoded in a source key."""
    return parse_source_key(source_key).as_of_date


def format_as_of_date(as_of_date: date) -> str:
    """Format a snapshot date as ``YYYY-MM-DD``."""
    return as_of_date.strftime(SOURCE_DATE_FORMAT)


def _escape_segment(segment: str) -> str:
    escaped = segment.replace(KEY_ESCAPE, KEY_ESCAPE * 2)
    return escaped.replace(KEY_SEPARATOR, KEY_ESCAPE + KEY_SEPARATOR)


def _parse_date(source_key: str, date_segment: str) -> date:
    try:
        return datetime.strptime(date_segment, SOURCE_DATE_FORMAT).date()
    except ValueError as error:
        raise InvalidSourceKeyError(
            f"Invalid source key '{source_key}': date prefix '{date_segment}' "
            "is not YYYY-MM-DD. Upload files under a dated prefix."
        ) from error


def _raise_key_error(source_key: str, reason: str) -> None:
    """Raise an invalid source key error.

    Raises:
        InvalidSourceKeyError: Always.
    """
    raise InvalidSourceKeyError(
        f"Invalid source key '{source_key}': {reason}. "
        f"Expected <YYYY-MM-DD>/<series>{SOURCE_KEY_SUFFIX}."
    )
