# tests/unit/catalog/test_snapshot.py — v1
"""Tests for catalog/snapshot.py: immutable snapshots and explicit refresh."""

from __future__ import annotations

from toolcompare.catalog.base_catalog import BaseCatalogProvider, StaticCatalogProvider
from toolcompare.catalog.snapshot import CatalogHolder, CatalogSnapshot
from toolcompare.core.models import CatalogEntry


class _CountingProvider(BaseCatalogProvider):
    def __init__(self, batches: list[list[CatalogEntry]]) -> None:
        self.batches = batches
        self.calls = 0

    def list_entries(self) -> list[CatalogEntry]:
        batch = self.batches[min(self.calls, len(self.batches) - 1)]
        self.calls += 1
        return batch


class TestCatalogSnapshot:
    def test_preserves_catalog_order(self, snapshot, catalog_entries):
        assert [e.slug for e in snapshot.entries] == [e.slug for e in catalog_entries]
        assert len(snapshot) == len(catalog_entries)

    def test_get_is_case_insensitive(self, snapshot):
        assert snapshot.get("NOTION-AI").name == "Notion AI"
        assert snapshot.get("nope") is None

    def test_lookup_resolves_aliases(self, snapshot):
        assert snapshot.lookup("jasper-ai").slug == "jasper"
        assert snapshot.lookup("unknown") is None

    def test_get_many_keeps_order_and_skips_unknown(self, snapshot):
        result = snapshot.get_many(["jasper", "missing", "notion-ai"])
        assert [e.slug for e in result] == ["jasper", "notion-ai"]

    def test_mixed_case_slug_round_trips(self):
        snap = CatalogSnapshot([
            CatalogEntry(slug="Notion-AI", name="Notion AI", aliases=["notion"]),
            CatalogEntry(slug="jasper", name="Jasper"),
        ])
        assert snap.lookup("notion").slug == "Notion-AI"
        assert snap.aliases.resolve("Notion-AI") == "Notion-AI"

    def test_duplicate_slug_keeps_first(self):
        entries = [
            CatalogEntry(slug="a", name="First"),
            CatalogEntry(slug="A", name="Second"),
        ]
        snap = CatalogSnapshot(entries)
        assert len(snap) == 1
        assert snap.get("a").name == "First"

    def test_load_from_provider(self, catalog_entries):
        snap = CatalogSnapshot.load(StaticCatalogProvider(catalog_entries))
        assert len(snap) == len(catalog_entries)
        assert snap.aliases.resolve("gcp-speech") == "google-cloud-speech-to-text"


class TestCatalogHolder:
    def test_lazy_load(self, catalog_entries):
        provider = _CountingProvider([catalog_entries])
        holder = CatalogHolder(provider)
        assert not holder.loaded
        assert provider.calls == 0
        first = holder.snapshot
        assert holder.loaded
        assert holder.snapshot is first
        assert provider.calls == 1

    def test_refresh_swaps_snapshot_without_touching_old(self, catalog_entries):
        provider = _CountingProvider([catalog_entries, catalog_entries[:2]])
        holder = CatalogHolder(provider)
        old = holder.snapshot
        new = holder.refresh()
        assert holder.snapshot is new
        assert new is not old
        assert len(old) == len(catalog_entries)
        assert len(new) == 2
