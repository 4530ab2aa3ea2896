# src/similarity/engine.py — v1
"""Content-based "similar tools" ranking.

Candidates are scored by cosine similarity against the base entry and the
top K are returned. Ties keep the candidate pool order (Python's sort is
stable and the key only looks at the score).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from toolcompare.catalog.aliases import normalize_token
from toolcompare.catalog.snapshot import CatalogSnapshot
from toolcompare.core.errors import ResolutionError
from toolcompare.core.models import CatalogEntry, ScoredEntry
from toolcompare.similarity.vectors import cosine, vectorize

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 6


def rank_alternatives(
    base: CatalogEntry,
    pool: Sequence[CatalogEntry],
    limit: int = DEFAULT_LIMIT,
    min_score: float = 0.0,
) -> list[ScoredEntry]:
    """Rank ``pool`` by similarity to ``base``.

    Args:
        base: Entry to find alternatives for. Excluded from the result by slug.
        pool: Candidate entries, in catalog order.
        limit: Maximum number of results (K). K <= 0 yields an empty list.
        min_score: Drop candidates scoring strictly below this value.

    Returns:
        At most ``limit`` ScoredEntry rows, scores non-increasing.
    """
    if limit <= 0 or not pool:
        return []

    base_key = normalize_token(base.slug)
    base_vec = vectorize(base)
    scored = [
        ScoredEntry(entry=candidate, score=cosine(base_vec, vectorize(candidate)))
        for candidate in pool
        if normalize_token(candidate.slug) != base_key
    ]
    if min_score > 0.0:
        scored = [s for s in scored if s.score >= min_score]

    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]


class SimilarityEngine:
    """Similarity lookups against a catalog snapshot."""

    def __init__(
        self,
        snapshot: CatalogSnapshot,
        default_limit: int = DEFAULT_LIMIT,
        min_score: float = 0.0,
    ) -> None:
        self._snapshot = snapshot
        self._default_limit = default_limit
        self._min_score = min_score

    def similar_to(self, token: str, limit: int | None = None) -> list[ScoredEntry]:
        """Alternatives for a slug or alias.

        Raises:
            ResolutionError: If ``token`` does not resolve to a catalog entry.
        """
        base = self._snapshot.lookup(token)
        if base is None:
            raise ResolutionError(f"Unknown tool: {token!r}")
        k = self._default_limit if limit is None else limit
        results = rank_alternatives(base, self._snapshot.entries, k, self._min_score)
        logger.debug("similar_to(%s): %d results", base.slug, len(results))
        return results
