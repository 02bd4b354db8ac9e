"""DynamoDB-backed price record store.

This module writes one price record per put. Items are keyed by
composite key and snapshot date, so repeated puts overwrite.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.config import IngestConfig
from core.errors import StoreWriteError
from core.types import StoredPriceRecord
from store.aws_session import build_session


class PriceStore(Protocol):
    """Write-only keyed store interface used by ingest."""

    def put(self, record: StoredPriceRecord) -> None:
        ...


class DynamoPriceStore:
    """Price store backed by a boto3 DynamoDB ``Table`` resource."""

    def __init__(self, table: Any) -> None:
        self._table = table

    def put(self, record: StoredPriceRecord) -> None:
        """Upsert one price record.

        Args:
            record: Record to persist.

        Raises:
            StoreWriteError: If DynamoDB rejects the write.
        """
        try:
            self._table.put_item(Item=record.to_item())
        except Exception as error:
            raise StoreWriteError(
                f"Failed to write price record '{record.composite_key}' "
                f"as of {record.as_of_date}: {error}."
            ) from error


def create_price_table(config: IngestConfig) -> Any:
    """Create a boto3 DynamoDB table resource for the configured table.

    Args:
        config: Runtime config with table name, region, and profile.

    Returns:
        DynamoDB ``Table`` resource.

    Raises:
        IngestConfigError: If no table is configured.
    """
    table_name = config.require_table_name()
    return build_session(config).resource("dynamodb").Table(table_name)


def create_price_store(config: IngestConfig) -> DynamoPriceStore:
    """Create the DynamoDB price store for the configured table."""
    return DynamoPriceStore(create_price_table(config))
