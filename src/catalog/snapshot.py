# src/catalog/snapshot.py — v1
"""Immutable catalog snapshot shared read-only by all request handlers.

A snapshot bundles the entries (catalog order), a slug lookup and the alias
index built from the same entries. Refreshing the catalog builds a new
snapshot and swaps the reference; in-flight requests keep the old one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from toolcompare.catalog.aliases import AliasIndex, normalize_token
from toolcompare.catalog.base_catalog import BaseCatalogProvider
from toolcompare.core.models import CatalogEntry

logger = logging.getLogger(__name__)


class CatalogSnapshot:
    """Read-only view over one load of the catalog."""

    def __init__(
        self,
        entries: list[CatalogEntry],
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        by_slug: dict[str, CatalogEntry] = {}
        kept: list[CatalogEntry] = []
        for entry in entries:
            key = normalize_token(entry.slug)
            if not key:
                continue
            if key in by_slug:
                logger.warning("Duplicate catalog slug %r; keeping first entry", key)
                continue
            by_slug[key] = entry
            kept.append(entry)

        self._entries = tuple(kept)
        self._by_slug = by_slug
        self._aliases = AliasIndex.build(self._entries, overrides)

    @classmethod
    def load(
        cls,
        provider: BaseCatalogProvider,
        overrides: Mapping[str, str] | None = None,
    ) -> CatalogSnapshot:
        """Materialize a snapshot from a provider."""
        snapshot = cls(provider.list_entries(), overrides)
        logger.info(
            "Catalog snapshot ready: %d entries, %d alias keys",
            len(snapshot), len(snapshot.aliases),
        )
        return snapshot

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    @property
    def aliases(self) -> AliasIndex:
        return self._aliases

    def get(self, slug: str) -> CatalogEntry | None:
        """Exact canonical lookup (case-insensitive)."""
        return self._by_slug.get(normalize_token(slug))

    def lookup(self, token: str) -> CatalogEntry | None:
        """Resolve an alias or slug and return the entry."""
        canonical = self._aliases.resolve(token)
        return self.get(canonical) if canonical else None

    def get_many(self, slugs: list[str]) -> list[CatalogEntry]:
        """Entries for canonical slugs, in the given order, skipping unknowns."""
        return [e for e in (self.get(s) for s in slugs) if e is not None]

    def __len__(self) -> int:
        return len(self._entries)


class CatalogHolder:
    """Owns the current snapshot and swaps it on an explicit refresh.

    Readers take ``holder.snapshot`` once per request and keep using that
    object; a concurrent refresh only replaces the reference.
    """

    def __init__(
        self,
        provider: BaseCatalogProvider,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        self._provider = provider
        self._overrides = overrides
        self._snapshot: CatalogSnapshot | None = None

    @property
    def snapshot(self) -> CatalogSnapshot:
        if self._snapshot is None:
            self._snapshot = CatalogSnapshot.load(self._provider, self._overrides)
        return self._snapshot

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def refresh(self) -> CatalogSnapshot:
        """Reload from the provider; the previous snapshot stays valid for its readers."""
        snapshot = CatalogSnapshot.load(self._provider, self._overrides)
        self._snapshot = snapshot
        return snapshot
