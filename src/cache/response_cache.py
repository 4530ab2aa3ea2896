# src/cache/response_cache.py — v1
"""Response cache: TTL-aware, failure-tolerant wrapper around a cache store.

Reads never raise: a corrupt or unreadable entry is a miss, and so is an
entry older than its TTL (checked lazily, nothing is evicted). Writes never
raise either; a failed write is logged and the caller keeps its payload.
There is no per-key locking, so concurrent misses for the same key may both
generate and both write. Payloads are deterministic per key, last write wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.cache.models import CachedComparison
from toolcompare.core.errors import SerializationError, StorageError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 7 * 86400.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResponseCache:
    """Content-addressed store for generated comparison payloads."""

    def __init__(
        self,
        store: BaseCacheStore,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._default_ttl = default_ttl_seconds
        self._clock = clock

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    async def get(self, key: str, ttl_seconds: float | None = None) -> dict[str, Any] | None:
        """Return the cached payload, or None on miss, expiry or read error.

        Args:
            key: Cache key.
            ttl_seconds: Freshness limit for this read. Defaults to the TTL
                recorded when the entry was written.
        """
        try:
            entry = await self._store.get(key)
        except SerializationError as e:
            logger.warning("Cache read failed, treating as miss: %s", e)
            return None
        except Exception as e:
            logger.warning("Unexpected cache read error for %s, treating as miss: %s", key, e)
            return None

        if entry is None:
            return None
        if entry.is_expired(self._clock(), ttl_seconds):
            logger.debug("Cache entry %s expired (age %.0fs)", key, entry.age_seconds(self._clock()))
            return None
        return entry.payload

    async def put(
        self,
        key: str,
        payload: dict[str, Any],
        ttl_seconds: float | None = None,
    ) -> bool:
        """Store ``payload`` under ``key``. Returns False if the write failed."""
        entry = CachedComparison(
            key=key,
            payload=payload,
            created_at=self._clock(),
            ttl_seconds=self._default_ttl if ttl_seconds is None else ttl_seconds,
        )
        try:
            await self._store.put(key, entry)
        except StorageError as e:
            logger.warning("Cache write failed, continuing without cache: %s", e)
            return False
        except Exception as e:
            logger.warning("Unexpected cache write error for %s: %s", key, e)
            return False
        return True

    async def close(self) -> None:
        await self._store.close()
