# src/cache/json_store.py — v1
"""JSON file-based cache store (default CACHE_BACKEND=json).

Stores each comparison as an individual JSON file under CACHE_ROOT. File
access runs in a worker thread so request handlers never block the loop.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.cache.models import CachedComparison
from toolcompare.core.errors import SerializationError, StorageError

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using one JSON file per key."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()

    @property
    def backend_name(self) -> str:
        return "json"

    async def get(self, key: str) -> CachedComparison | None:
        """Retrieve cache entry by key."""
        return await asyncio.to_thread(self._read, key)

    async def put(self, key: str, entry: CachedComparison) -> None:
        """Store a cache entry (write to temp file, then rename)."""
        await asyncio.to_thread(self._write, key, entry.model_dump_json(indent=2))

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        await asyncio.to_thread(self._entry_path(key).unlink, missing_ok=True)

    def _read(self, key: str) -> CachedComparison | None:
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return CachedComparison(**data)
        except (OSError, json.JSONDecodeError, TypeError, PydanticValidationError) as e:
            raise SerializationError(f"Corrupt cache entry {key}: {e}") from e

    def _write(self, key: str, text: str) -> None:
        path = self._entry_path(key)
        tmp = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise StorageError(f"Cannot write cache entry {key}: {e}") from e

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_key}.json"
