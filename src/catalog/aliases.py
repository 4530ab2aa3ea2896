# src/catalog/aliases.py — v1
"""Alias index: maps every known spelling of a tool to its canonical slug.

Build order:
  1. canonical slug -> itself, for every entry (lookup is case-insensitive,
     the value keeps the catalog spelling)
  2. curated overrides, only when the target slug exists
  3. alias fields of each entry, in catalog order

Steps 2 and 3 are first-write-wins: an alias already claimed keeps its first
target and the later claim is recorded as an AliasConflict. Canonical slugs
are never re-pointed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from toolcompare.core.models import CatalogEntry

logger = logging.getLogger(__name__)

DEFAULT_OVERRIDES: dict[str, str] = {
    "gcp-speech": "google-cloud-speech-to-text",
    "gcp-tts": "google-cloud-text-to-speech",
    "gcp-vision": "google-cloud-vision",
    "gcp-translate": "google-cloud-translate",
}


def normalize_token(token: object) -> str:
    """Trim + lowercase; non-strings normalize to an empty string."""
    if not isinstance(token, str):
        return ""
    return token.strip().lower()


@dataclass(frozen=True)
class AliasConflict:
    """Two entries claimed the same alias; ``kept`` won by catalog order."""

    alias: str
    kept: str
    rejected: str


class AliasIndex:
    """Immutable alias -> canonical slug lookup."""

    def __init__(
        self,
        mapping: Mapping[str, str],
        canonicals: Iterable[str],
        conflicts: Iterable[AliasConflict] = (),
    ) -> None:
        self._mapping = dict(mapping)
        self._canonicals = frozenset(canonicals)
        self._conflicts = tuple(conflicts)

    @classmethod
    def build(
        cls,
        entries: Iterable[CatalogEntry],
        overrides: Mapping[str, str] | None = None,
    ) -> AliasIndex:
        """Build the index from a catalog snapshot.

        Args:
            entries: Catalog entries in catalog order.
            overrides: Curated alias -> slug pairs. Defaults to DEFAULT_OVERRIDES.
                Pairs whose target is not in the catalog are ignored.
        """
        entries = list(entries)
        overrides = DEFAULT_OVERRIDES if overrides is None else overrides
        mapping: dict[str, str] = {}
        conflicts: list[AliasConflict] = []

        # Lowercased key -> the catalog's own spelling of the slug
        for entry in entries:
            key = normalize_token(entry.slug)
            if key:
                mapping.setdefault(key, entry.slug.strip())
        canonicals = set(mapping)

        def claim(alias: str, target: str) -> None:
            current = mapping.get(alias)
            if current is None:
                mapping[alias] = target
            elif current != target:
                conflicts.append(AliasConflict(alias=alias, kept=current, rejected=target))

        for alias, target in overrides.items():
            alias_key, target_key = normalize_token(alias), normalize_token(target)
            if alias_key and target_key in canonicals:
                claim(alias_key, mapping[target_key])

        for entry in entries:
            key = normalize_token(entry.slug)
            if not key:
                continue
            canonical = mapping[key]
            seen: set[str] = set()
            for candidate in entry.alias_candidates():
                alias = normalize_token(candidate)
                if not alias or alias in seen:
                    continue
                seen.add(alias)
                claim(alias, canonical)

        for c in conflicts:
            logger.warning(
                "Alias %r claimed by %r but already mapped to %r; keeping first",
                c.alias, c.rejected, c.kept,
            )
        logger.debug(
            "Alias index built: %d canonical, %d total keys, %d conflicts",
            len(canonicals), len(mapping), len(conflicts),
        )
        return cls(mapping, canonicals, conflicts)

    def resolve(self, token: object) -> str | None:
        """Return the canonical slug for ``token`` as the catalog spells it, or None.

        Never raises.
        """
        key = normalize_token(token)
        if not key:
            return None
        return self._mapping.get(key)

    def is_canonical(self, slug: str) -> bool:
        return normalize_token(slug) in self._canonicals

    @property
    def conflicts(self) -> tuple[AliasConflict, ...]:
        return self._conflicts

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, token: object) -> bool:
        return self.resolve(token) is not None
