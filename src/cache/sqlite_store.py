# src/cache/sqlite_store.py — v1
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. Statements run in a worker
thread; the shared connection is guarded by a lock.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path

from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.cache.models import CachedComparison
from toolcompare.core.errors import SerializationError, StorageError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS comparisons (
    key TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    created_at TEXT NOT NULL
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        self._lock = threading.Lock()

    @property
    def backend_name(self) -> str:
        return "sqlite"

    async def get(self, key: str) -> CachedComparison | None:
        """Retrieve cache entry by key."""
        try:
            row = await asyncio.to_thread(
                self._execute, "SELECT data FROM comparisons WHERE key = ?", (key,), True,
            )
        except sqlite3.Error as e:
            raise SerializationError(f"Cannot read cache entry {key}: {e}") from e
        if row is None:
            return None
        try:
            return CachedComparison.model_validate_json(row[0])
        except ValueError as e:
            raise SerializationError(f"Corrupt cache entry {key}: {e}") from e

    async def put(self, key: str, entry: CachedComparison) -> None:
        """Store a cache entry (upsert)."""
        try:
            await asyncio.to_thread(
                self._execute,
                "INSERT OR REPLACE INTO comparisons (key, data, created_at) VALUES (?, ?, ?)",
                (key, entry.model_dump_json(), entry.created_at.isoformat()),
            )
        except sqlite3.Error as e:
            raise StorageError(f"Cannot write cache entry {key}: {e}") from e

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        await asyncio.to_thread(self._execute, "DELETE FROM comparisons WHERE key = ?", (key,))

    async def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _execute(self, sql: str, params: tuple, fetch: bool = False) -> tuple | None:
        with self._lock:
            cursor = self._conn.execute(sql, params)
            if fetch:
                return cursor.fetchone()
            self._conn.commit()
            return None
