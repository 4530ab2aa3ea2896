# src/cache/redis_store.py — v1
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis. Uses the asyncio client so
lookups never block the event loop.
TTL is still checked lazily by ResponseCache; Redis-side expiry is not used
so that all backends share the same freshness semantics.
"""

from __future__ import annotations

import logging

from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.cache.models import CachedComparison
from toolcompare.core.errors import SerializationError, StorageError

logger = logging.getLogger(__name__)

_KEY_PREFIX = "toolcompare:cache:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store."""

    def __init__(self, redis_url: str, client: object | None = None) -> None:
        if client is None:
            try:
                import redis.asyncio as aioredis
            except ImportError as e:
                raise ImportError(
                    "redis package required: pip install redis"
                ) from e
            client = aioredis.Redis.from_url(redis_url, decode_responses=True)
        self._client = client

    @property
    def backend_name(self) -> str:
        return "redis"

    async def get(self, key: str) -> CachedComparison | None:
        """Retrieve cache entry by key."""
        try:
            data = await self._client.get(f"{_KEY_PREFIX}{key}")
        except Exception as e:
            raise SerializationError(f"Cannot read cache entry {key}: {e}") from e
        if data is None:
            return None
        try:
            return CachedComparison.model_validate_json(data)
        except ValueError as e:
            raise SerializationError(f"Corrupt cache entry {key}: {e}") from e

    async def put(self, key: str, entry: CachedComparison) -> None:
        """Store a cache entry."""
        try:
            await self._client.set(f"{_KEY_PREFIX}{key}", entry.model_dump_json())
        except Exception as e:
            raise StorageError(f"Cannot write cache entry {key}: {e}") from e

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        await self._client.delete(f"{_KEY_PREFIX}{key}")

    async def close(self) -> None:
        await self._client.aclose()
