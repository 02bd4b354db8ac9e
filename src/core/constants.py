"""Core constants used across coin price ingest modules.

This module centralizes source format and storage literals.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

SERIES_LIST_KEY = "serieslist.json"
SOURCE_KEY_SUFFIX = ".csv"
SOURCE_DATE_FORMAT = "%Y-%m-%d"
KEY_SEPARATOR = "|"
KEY_ESCAPE = "\\"
CSV_DELIMITER = ","
FIXED_COLUMN_COUNT = 2
DEFAULT_AWS_REGION = "us-west-2"
ITEM_KEY_FIELD = "coin"
ITEM_DATE_FIELD = "price_as_of"
ITEM_PRICES_FIELD = "prices"
