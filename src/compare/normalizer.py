# src/compare/normalizer.py — v1
"""Turn raw user identifiers into an ordered canonical slug selection.

Steps: resolve each token through the alias index, drop unresolved tokens,
de-duplicate case-insensitively (first seen wins), truncate to the limit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from toolcompare.catalog.aliases import AliasIndex, normalize_token
from toolcompare.core.errors import EmptySelection, ValidationError
from toolcompare.core.models import NormalizedSelection

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3
DEFAULT_MAX_RAW = 20


def parse_identifiers(
    value: str | Sequence[str] | None,
    max_raw: int = DEFAULT_MAX_RAW,
) -> list[str]:
    """Accept a list or a comma-separated string of identifiers.

    Raises:
        ValidationError: No usable identifier, a non-string item, or more
            than ``max_raw`` tokens.
    """
    if value is None:
        raise ValidationError("No tool identifiers provided")

    if isinstance(value, str):
        raw_items: list[object] = list(value.split(","))
    elif isinstance(value, (list, tuple)):
        raw_items = []
        for item in value:
            if not isinstance(item, str):
                raise ValidationError(f"Identifiers must be strings, got {type(item).__name__}")
            # A list item may itself be a comma-joined group
            raw_items.extend(item.split(","))
    else:
        raise ValidationError("Identifiers must be a list or a comma-separated string")

    tokens = [t for t in (normalize_token(x) for x in raw_items) if t]
    if not tokens:
        raise ValidationError("No tool identifiers provided")
    if len(tokens) > max_raw:
        raise ValidationError(f"Too many identifiers ({len(tokens)} > {max_raw})")
    return tokens


def normalize_selection(
    tokens: Sequence[str],
    aliases: AliasIndex,
    limit: int = DEFAULT_LIMIT,
) -> NormalizedSelection:
    """Resolve, dedupe and truncate ``tokens``.

    Raises:
        EmptySelection: If nothing resolves.
    """
    slugs: list[str] = []
    seen: set[str] = set()
    unresolved: list[str] = []

    for token in tokens:
        canonical = aliases.resolve(token)
        if canonical is None:
            unresolved.append(token)
            continue
        key = canonical.lower()
        if key in seen:
            continue
        seen.add(key)
        slugs.append(canonical)

    slugs = slugs[: max(limit, 0)]
    if unresolved:
        logger.info("Dropped unresolved identifiers: %s", ", ".join(unresolved))
    if not slugs:
        raise EmptySelection(unresolved)

    selection = NormalizedSelection(slugs=slugs, unresolved=unresolved)
    if selection.insufficient:
        logger.debug("Selection has a single tool: %s", slugs[0])
    return selection
