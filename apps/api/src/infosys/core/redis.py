"""
Redis Connection

Optional async Redis client backing the rate limiter. The API runs without
Redis; callers fall back to in-process state when the client is None.
"""

import logging

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from infosys.core.config import settings

logger = logging.getLogger(__name__)

redis_client: Redis | None = None


async def init_redis() -> Redis | None:
    """
    Connect to Redis on application startup.

    Returns:
        The connected client, or None when Redis is unreachable.
    """
    global redis_client
    client = from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        logger.warning(f"Redis unavailable at startup, rate limits use memory: {e}")
        await client.aclose()
        redis_client = None
        return None

    redis_client = client
    return redis_client


def get_redis() -> Redis | None:
    """Return the shared client, or None if Redis is not connected."""
    return redis_client


async def close_redis() -> None:
    """Close the Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
