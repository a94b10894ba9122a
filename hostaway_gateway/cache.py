"""Redis-backed key/value cache used for tokens and availability."""

from __future__ import annotations

import logging

import redis.asyncio as redis

logger = logging.getLogger("hostaway_gateway")

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class CacheClient:
    """Thin wrapper around redis for string get and set-with-expiry."""

    def __init__(self, redis_url: str | None = None, *, client: redis.Redis | None = None) -> None:
        self.redis_url = redis_url or DEFAULT_REDIS_URL
        self._redis = client

    @property
    def redis(self) -> redis.Redis:
        if self._redis is None:
            raise RuntimeError("Cache client is not connected")
        return self._redis

    async def connect(self) -> None:
        """Open the connection and verify the server answers."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        await self._redis.ping()
        logger.info("Connected to cache")

    async def get(self, key: str) -> str | None:
        return await self.redis.get(key)

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store a value that expires after ``ttl_seconds``."""
        return bool(await self.redis.setex(key, ttl_seconds, value))

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
