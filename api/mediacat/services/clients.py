"""Process-wide Redis and S3 clients, created lazily."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from redis.asyncio import Redis

from mediacat.core.config import settings
from mediacat.utils.redaction import redact_secrets

logger = logging.getLogger("mediacat.services.clients")

_redis: Redis | None = None
_s3_client: Any = None


def get_redis() -> Redis:
    """Return the shared Redis client; no connection is opened until first use."""
    global _redis
    if _redis is None:
        _redis = Redis.from_url(settings.redis_url, decode_responses=True)
        logger.info("Redis client configured for %s", redact_secrets(settings.redis_url))
    return _redis


def get_s3_client() -> Any:
    """Return the shared boto3 S3 client used for presigning."""
    global _s3_client
    if _s3_client is None:
        boto_config = BotoConfig(
            signature_version="s3v4",
            s3={"addressing_style": "path" if settings.s3_use_path_style else "auto"},
        )
        _s3_client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            endpoint_url=settings.storage_endpoint_url or None,
            config=boto_config,
        )
        logger.info("S3 presign client ready (bucket: %s)", settings.storage_bucket)
    return _s3_client


async def close_clients() -> None:
    """Release pooled connections on shutdown."""
    global _redis, _s3_client
    if _redis is not None:
        await _redis.aclose()
        _redis = None
    _s3_client = None
