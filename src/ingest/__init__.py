"""Pricing snapshot ingestion.

This package parses pricing files from the object store and upserts
per-issue price records into the keyed store.
"""
