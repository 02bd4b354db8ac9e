"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import IngestConfig
from core.constants import DEFAULT_AWS_REGION
from core.errors import IngestConfigError


def test_from_env_reads_table_and_bucket(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve the table and bucket from environment."""
    monkeypatch.setenv("DYNAMODB_TABLE", "coin-prices")
    monkeypatch.setenv("S3_BUCKET", "coin-price-files")

    config = IngestConfig.from_env()

    assert (config.require_table_name(), config.require_source_bucket()) == (
        "coin-prices",
        "coin-price-files",
    )


def test_from_env_defaults_region() -> None:
    """Region should fall back to the default when unset."""
    config = IngestConfig.from_env()

    assert config.region == DEFAULT_AWS_REGION and config.profile is None


def test_require_table_name_raises_for_blank_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank table names should be treated as missing."""
    monkeypatch.setenv("DYNAMODB_TABLE", "   ")
    config = IngestConfig.from_env()

    with pytest.raises(IngestConfigError):
        config.require_table_name()

    assert config.table_name is None


def test_require_source_bucket_raises_when_unset() -> None:
    """Enumeration needs a configured bucket."""
    config = IngestConfig.from_env()

    with pytest.raises(IngestConfigError, match="S3_BUCKET"):
        config.require_source_bucket()
