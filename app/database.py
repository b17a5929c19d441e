# app/database.py
from typing import Optional

import redis

from app.config import Settings


def get_redis_client(settings: Settings) -> Optional[redis.Redis]:
    """Redis client for the nutrition cache, or None when no host is configured."""
    if not settings.redis_host:
        return None

    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        decode_responses=True,
        socket_timeout=settings.external_timeout_seconds,
    )
