# src/cache/base_cache_store.py — v1
"""Abstract cache store interface.

Stores are dumb key/value persistence. They raise SerializationError when a
stored entry cannot be decoded and StorageError when a write fails; the
ResponseCache wrapper turns both into misses / logged warnings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from toolcompare.cache.models import CachedComparison


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (json, sqlite, redis, memory)."""

    @abstractmethod
    async def get(self, key: str) -> CachedComparison | None:
        """Retrieve an entry; None when absent.

        Raises:
            SerializationError: If the stored entry is corrupt.
        """

    @abstractmethod
    async def put(self, key: str, entry: CachedComparison) -> None:
        """Store an entry, replacing any previous one.

        Raises:
            StorageError: If the write fails.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove an entry (no-op when absent)."""

    async def close(self) -> None:
        """Release backend resources."""
