# src/cache/memory_store.py — v1
"""In-process cache store (CACHE_BACKEND=memory).

Entries live only as long as the store instance. Serialized on write so that
callers never share mutable payload objects with the store.
"""

from __future__ import annotations

from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.cache.models import CachedComparison


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def get(self, key: str) -> CachedComparison | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return CachedComparison.model_validate_json(raw)

    async def put(self, key: str, entry: CachedComparison) -> None:
        self._data[key] = entry.model_dump_json()

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)
