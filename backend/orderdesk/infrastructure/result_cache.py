"""Result Cache — Redis-backed store for serialized list results.

Invariants:
    - Values are JSON strings; the cache never interprets them
    - ttl == 0 means "do not store" (Redis rejects a zero expiry)
    - All redis-py exceptions mapped to CacheError (core/errors.py)

Design Decisions:
    - redis.asyncio client created lazily from a URL (decode_responses: str in, str out)
    - Singleton cache_manager initialized on startup, None when caching is disabled
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from orderdesk.core.errors import CacheError

logger = logging.getLogger(__name__)


class RedisResultCache:
    """ResultCache implementation over redis.asyncio."""

    def __init__(self, url: str):
        self.url = url
        self._client: Redis | None = None

    def get_client(self) -> Redis:
        """Get or create Redis client (lazy)."""
        if self._client is None:
            self._client = Redis.from_url(self.url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> str | None:
        try:
            return await self.get_client().get(key)
        except RedisError as e:
            raise CacheError(str(e), "get")

    async def set(self, key: str, value: str, ttl: int) -> None:
        if ttl <= 0:
            return
        try:
            await self.get_client().set(key, value, ex=ttl)
        except RedisError as e:
            raise CacheError(str(e), "set")

    async def ping(self) -> bool:
        """Check cache connectivity (for the healthcheck)."""
        try:
            return bool(await self.get_client().ping())
        except RedisError as e:
            logger.error(f"Cache health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton (initialized on startup when REDIS_URL is set)
cache_manager: RedisResultCache | None = None


async def init_cache(url: str) -> None:
    """Create the cache and verify connectivity. Raises CacheError if unreachable."""
    global cache_manager
    cache = RedisResultCache(url)
    if not await cache.ping():
        await cache.close()
        raise CacheError("Redis unreachable at startup", "connect")
    cache_manager = cache


async def close_cache() -> None:
    global cache_manager
    if cache_manager:
        await cache_manager.close()
        cache_manager = None


async def get_result_cache() -> RedisResultCache | None:
    """FastAPI dependency for the result cache. None when caching is disabled."""
    return cache_manager
