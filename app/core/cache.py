"""Key-value cache used for OAuth token storage.

Callers depend on the narrow ``TokenCache`` protocol (get/set/delete with an
optional TTL) so the Redis-backed implementation can be swapped for an
in-memory fake in tests. Redis is optional: when REDIS_URL is unset,
``get_token_cache`` returns None and callers keep tokens in memory only.

Reads and writes are independent round trips with no locking; two
concurrent refreshes may both write, and the last write wins.
"""

from __future__ import annotations

from typing import Protocol

import redis
import redis.asyncio as aioredis
from loguru import logger

from app.config.settings import settings


class TokenCache(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool: ...

    async def delete(self, key: str) -> bool: ...


class RedisTokenCache:
    """Redis implementation of TokenCache.

    Cache failures are logged and reported as a miss (or a failed write)
    so a Redis outage degrades to in-memory tokens instead of failing tools.
    """

    def __init__(self, client: aioredis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> RedisTokenCache:
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except redis.RedisError as e:
            logger.warning(f"[CACHE] GET failed for key={key}: {e}")
            return None

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        try:
            if ttl_seconds is not None and ttl_seconds > 0:
                await self._client.set(key, value, ex=ttl_seconds)
            else:
                await self._client.set(key, value)
        except redis.RedisError as e:
            logger.warning(f"[CACHE] SET failed for key={key}: {e}")
            return False
        return True

    async def delete(self, key: str) -> bool:
        try:
            await self._client.delete(key)
        except redis.RedisError as e:
            logger.warning(f"[CACHE] DEL failed for key={key}: {e}")
            return False
        return True

    async def close(self) -> None:
        await self._client.aclose()


_cache: RedisTokenCache | None = None


def get_token_cache() -> TokenCache | None:
    """Get the process-wide token cache, or None when Redis is not configured."""
    global _cache
    if not settings.redis_url:
        return None
    if _cache is None:
        logger.info("[CACHE] Initializing Redis token cache")
        _cache = RedisTokenCache.from_url(settings.redis_url)
    return _cache
