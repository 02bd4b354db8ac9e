"""boto3 session construction.

This module builds sessions from runtime config so S3 and DynamoDB
clients share the same region and profile resolution.
"""

from __future__ import annotations

import boto3

from core.config import IngestConfig


def build_session(config: IngestConfig) -> boto3.session.Session:
    """Create a boto3 session for the configured profile and region.

    Args:
        config: Runtime config containing region and optional profile.

    Returns:
        Boto3 session.
    """
    return boto3.session.Session(**_build_session_kwargs(config))


def _build_session_kwargs(config: IngestConfig) -> dict[str, str]:
    kwargs: dict[str, str] = {"region_name": config.region}
    if config.profile:
        kwargs["profile_name"] = config.profile
    return kwargs
