# src/cache/models.py — v1
"""Cache domain model: CachedComparison."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict


class CachedComparison(BaseModel):
    """A generated comparison payload stored under its content hash.

    Immutable once written; writing the same key again replaces it.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    payload: dict[str, Any]
    created_at: datetime
    ttl_seconds: float

    def age_seconds(self, now: datetime | None = None) -> float:
        now = now or datetime.now(timezone.utc)
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return (now - created).total_seconds()

    def is_expired(self, now: datetime | None = None, ttl_seconds: float | None = None) -> bool:
        """True when the entry is older than its TTL (strictly greater)."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        return self.age_seconds(now) > ttl
