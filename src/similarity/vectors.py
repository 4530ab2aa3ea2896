# src/similarity/vectors.py — v1
"""Sparse weighted token vectors and cosine similarity.

Vectors are plain ``dict[str, float]`` keyed by field-namespaced tokens
(``cat:writing``, ``feat:outline``...). They are pure functions of entry
content and are never persisted.
"""

from __future__ import annotations

import math
import re

from toolcompare.core.models import CatalogEntry

SparseVector = dict[str, float]

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "for", "of", "to", "in", "on",
    "with", "by", "at", "from", "into", "via",
})

# Field weights
W_CATEGORY = 3.0
W_TASK = 3.0
W_FEATURE = 1.0
W_MODEL = 2.0
W_NAME = 1.0
W_TAGLINE = 1.0

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")


def tokenize(text: str | None) -> list[str]:
    """Lowercase, replace anything outside [a-z0-9 -] by spaces, split, drop stop-words."""
    if not text:
        return []
    cleaned = _DISALLOWED.sub(" ", text.lower())
    return [t for t in cleaned.split() if t not in STOP_WORDS]


def vectorize(entry: CatalogEntry) -> SparseVector:
    """Build the weighted sparse vector for one catalog entry."""
    vec: SparseVector = {}

    def bump(token: str, weight: float) -> None:
        vec[token] = vec.get(token, 0.0) + weight

    # Categories & tasks are strong signals
    for c in entry.categories:
        bump(f"cat:{c}", W_CATEGORY)
    for t in entry.tasks:
        bump(f"task:{t}", W_TASK)

    for feature in entry.features:
        for tok in tokenize(feature):
            bump(f"feat:{tok}", W_FEATURE)
    for m in entry.models:
        bump(f"model:{m.lower()}", W_MODEL)

    for tok in tokenize(entry.name):
        bump(f"name:{tok}", W_NAME)
    for tok in tokenize(entry.tagline):
        bump(f"tag:{tok}", W_TAGLINE)

    return vec


def norm(vec: SparseVector) -> float:
    return math.sqrt(sum(w * w for w in vec.values()))


def cosine(a: SparseVector, b: SparseVector) -> float:
    """Cosine similarity; 0.0 when either vector is empty."""
    denom = norm(a) * norm(b) or 1.0
    small, large = (a, b) if len(a) < len(b) else (b, a)
    dot = 0.0
    for token, w in small.items():
        other = large.get(token)
        if other:
            dot += w * other
    return dot / denom
