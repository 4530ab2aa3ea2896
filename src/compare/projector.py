# src/compare/projector.py — v1
"""Reduce catalog entries to the fields the generation prompt needs."""

from __future__ import annotations

from collections.abc import Iterable

from toolcompare.core.models import CatalogEntry, LiteProjection

PROJECTED_FIELDS = tuple(LiteProjection.model_fields)


def project_entry(entry: CatalogEntry) -> LiteProjection:
    return LiteProjection(
        slug=entry.slug,
        name=entry.name,
        tagline=entry.tagline or None,
        pricing=entry.pricing,
        features=list(entry.features),
        platforms=list(entry.platforms),
        models=list(entry.models),
        integrations=list(entry.integrations),
        categories=list(entry.categories),
        tasks=list(entry.tasks),
        vendor=entry.vendor,
        updated_at=entry.updated_at,
        website_url=entry.website_url,
    )


def project(entries: Iterable[CatalogEntry]) -> list[LiteProjection]:
    """Project entries, preserving input order."""
    return [project_entry(e) for e in entries]
