"""Coin price ingest CLI entry points.
This module exposes ingest, listing, and backfill commands.
It maps argparse commands onto pipeline calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from typing import Any, Sequence

from core.config import IngestConfig
from core.errors import CoinPriceError
from ingest.backfill import backfill_bucket
from ingest.pipeline import PriceIngestRunner, ingest_source_object
from ingest.source_enumerator import list_source_keys
from store.object_store import create_object_store


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="coin-prices", description="Coin price ingest CLI")
    parser.add_argument("--region", help="Override AWS_REGION for this command")
    parser.add_argument("--table", help="Override DYNAMODB_TABLE for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_list_keys_command(subparsers)
    _add_backfill_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the coin price ingest CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _build_config(args)
    try:
        if args.command == "ingest":
            return _run_ingest_command(config, args)
        if args.command == "list-keys":
            return _run_list_keys_command(config)
        if args.command == "backfill":
            return _run_backfill_command(config)
    except CoinPriceError as error:
        parser.exit(1, f"error: {error}\n")
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> IngestConfig:
    """Build config with optional command-line overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Runtime configuration.
    """
    config = IngestConfig.from_env()
    if args.region:
        config = replace(config, region=args.region)
    if args.table:
        config = replace(config, table_name=args.table)
    if getattr(args, "bucket", None):
        config = replace(config, source_bucket=args.bucket)
    return config


def _run_ingest_command(config: IngestConfig, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when any record failed to store.
    """
    result = ingest_source_object(config.require_source_bucket(), args.key, config)
    print(json.dumps(result.to_summary(), sort_keys=True))
    return 0 if result.failed_count == 0 else 1


def _run_list_keys_command(config: IngestConfig) -> int:
    """Handle list-keys command.

    Args:
        config: Runtime configuration.

    Returns:
        Exit code, 1 when listing failed.
    """
    listing = list_source_keys(create_object_store(config), config.require_source_bucket())
    for key in listing.keys:
        print(key)
    return 0 if listing.ok else 1


def _run_backfill_command(config: IngestConfig) -> int:
    """Handle backfill command.

    Args:
        config: Runtime configuration.

    Returns:
        Exit code, 1 when listing failed or any key or record failed.
    """
    runner = PriceIngestRunner.from_config(config)
    result = backfill_bucket(runner, config.require_source_bucket())
    for ingest_result in result.results:
        print(json.dumps(ingest_result.to_summary(), sort_keys=True))
    for key in result.skipped_keys:
        print(f"skipped\t{key}")
    failed = any(ingest_result.failed_count for ingest_result in result.results)
    if not result.listing_ok or result.skipped_keys or failed:
        return 1
    return 0


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest one pricing file")
    parser.add_argument("key", help="Source key, e.g. 2024-01-31/lincoln-cents.csv")
    parser.add_argument("--bucket", help="Override S3_BUCKET for this command")


def _add_list_keys_command(subparsers: Any) -> None:
    """Register list-keys subcommand."""
    parser = subparsers.add_parser("list-keys", help="List pricing files in the source bucket")
    parser.add_argument("--bucket", help="Override S3_BUCKET for this command")


def _add_backfill_command(subparsers: Any) -> None:
    """Register backfill subcommand."""
    parser = subparsers.add_parser("backfill", help="Ingest every pricing file in the bucket")
    parser.add_argument("--bucket", help="Override S3_BUCKET for this command")
