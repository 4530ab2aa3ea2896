# tests/unit/similarity/test_engine.py — v1
"""Tests for similarity/engine.py: ranking and snapshot-backed lookups."""

from __future__ import annotations

import pytest

from toolcompare.core.errors import ResolutionError
from toolcompare.core.models import CatalogEntry
from toolcompare.similarity.engine import SimilarityEngine, rank_alternatives


@pytest.fixture
def abc_entries() -> tuple[CatalogEntry, list[CatalogEntry]]:
    base = CatalogEntry(
        slug="a", name="", categories=["Writing"], tasks=["Summarize"],
        features=["Outline builder"],
    )
    pool = [
        CatalogEntry(slug="c", name="", categories=["Video"]),
        CatalogEntry(slug="b", name="", categories=["Writing"], tasks=["Summarize"]),
    ]
    return base, pool


class TestRankAlternatives:
    def test_closer_candidate_ranks_first(self, abc_entries):
        base, pool = abc_entries
        ranked = rank_alternatives(base, pool)
        assert [s.entry.slug for s in ranked] == ["b", "c"]
        assert ranked[0].score > ranked[1].score
        assert ranked[1].score == 0.0

    def test_base_excluded(self, catalog_entries):
        base = catalog_entries[0]
        ranked = rank_alternatives(base, catalog_entries, limit=10)
        assert base.slug not in {s.entry.slug for s in ranked}

    def test_respects_limit(self, catalog_entries):
        ranked = rank_alternatives(catalog_entries[0], catalog_entries, limit=2)
        assert len(ranked) == 2

    def test_zero_limit_is_empty(self, catalog_entries):
        assert rank_alternatives(catalog_entries[0], catalog_entries, limit=0) == []

    def test_scores_non_increasing(self, catalog_entries):
        ranked = rank_alternatives(catalog_entries[0], catalog_entries, limit=10)
        scores = [s.score for s in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_pool_order(self):
        base = CatalogEntry(slug="base", name="", categories=["Video"])
        pool = [CatalogEntry(slug=s, name="", categories=["Audio"]) for s in ("x", "y", "z")]
        assert [s.entry.slug for s in rank_alternatives(base, pool)] == ["x", "y", "z"]

    def test_min_score_filters(self, abc_entries):
        base, pool = abc_entries
        ranked = rank_alternatives(base, pool, min_score=0.1)
        assert [s.entry.slug for s in ranked] == ["b"]

    def test_writing_tools_rank_above_video(self, catalog_entries):
        notion = catalog_entries[0]
        ranked = rank_alternatives(notion, catalog_entries, limit=10)
        slugs = [s.entry.slug for s in ranked]
        assert slugs.index("jasper") < slugs.index("runway")


class TestSimilarityEngine:
    def test_similar_to_by_alias(self, snapshot):
        engine = SimilarityEngine(snapshot)
        results = engine.similar_to("Notion", limit=3)
        assert len(results) <= 3
        assert all(r.entry.slug != "notion-ai" for r in results)

    def test_default_limit(self, snapshot):
        engine = SimilarityEngine(snapshot, default_limit=1)
        assert len(engine.similar_to("jasper")) == 1

    def test_unknown_token_raises(self, snapshot):
        with pytest.raises(ResolutionError):
            SimilarityEngine(snapshot).similar_to("nope")
