# src/cache/fingerprint.py — v1
"""Content-addressed cache keys for comparison requests.

The key is a SHA-256 over a canonical JSON serialization (sorted keys,
compact separators) of the projected tools in request order plus the
generation options. Dict key order in the inputs therefore never changes
the key; tool order does.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from typing import Any

from toolcompare.core.models import CompareOptions, LiteProjection

KEY_LENGTH = 24


def canonical_json(value: Any) -> str:
    """Field-order-stable JSON encoding."""
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def compute_cache_key(
    projections: Sequence[LiteProjection],
    options: CompareOptions,
) -> str:
    """Derive the cache key for a comparison request.

    Args:
        projections: Lite projections in request order.
        options: Effective generation options (defaults already applied).

    Returns:
        Hex digest truncated to KEY_LENGTH characters.
    """
    material = {
        "tools": [p.model_dump(mode="json") for p in projections],
        "opts": options.cache_identity(),
    }
    digest = hashlib.sha256(canonical_json(material).encode("utf-8")).hexdigest()
    return digest[:KEY_LENGTH]
