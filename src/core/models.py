# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OutputFormat = Literal["json", "markdown"]


# === CATALOG ===


class CatalogEntry(BaseModel):
    """A single tool as published by the catalog pipeline (read-only here).

    Unknown catalog fields are kept as extras so that the compare table can
    read nested values such as ``technical.context_tokens``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    slug: str
    name: str
    tagline: str = ""
    categories: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    models: list[str] = Field(default_factory=list)
    integrations: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    pricing: Any = None
    vendor: Any = None
    updated_at: str | None = None
    website_url: str | None = None

    # Alias-bearing fields
    aliases: list[str] = Field(default_factory=list)
    alt_slugs: list[str] = Field(default_factory=list)
    short_slug: str | None = None
    slug_short: str | None = None
    short: str | None = None
    abbrev: str | None = None

    @field_validator(
        "categories", "tasks", "features", "models", "integrations",
        "platforms", "aliases", "alt_slugs",
        mode="before",
    )
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(x) for x in v if x is not None]

    @field_validator("tagline", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def alias_candidates(self) -> list[str]:
        """All alias spellings claimed by this entry, in field order."""
        candidates: list[str] = [*self.aliases, *self.alt_slugs]
        for single in (self.short_slug, self.slug_short, self.short, self.abbrev):
            if single:
                candidates.append(single)
        return candidates


class ScoredEntry(BaseModel):
    """One row of a ranked similarity result."""

    entry: CatalogEntry
    score: float


# === COMPARISON ===


class LiteProjection(BaseModel):
    """Comparison-relevant subset of a CatalogEntry."""

    slug: str
    name: str
    tagline: str | None = None
    pricing: Any = None
    features: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    models: list[str] = Field(default_factory=list)
    integrations: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)
    vendor: Any = None
    updated_at: str | None = None
    website_url: str | None = None


class CompareWeights(BaseModel):
    """Relative importance of comparison dimensions (sum=1 by convention)."""

    accuracy: float = 0.4
    cost: float = 0.25
    speed: float = 0.2
    integrations: float = 0.15


class CompareOptions(BaseModel):
    """Generation options supplied by the caller.

    ``None`` fields are filled from Settings before the cache key is derived.
    ``cache_ttl_days`` only affects freshness and is excluded from the key.
    """

    format: OutputFormat = "json"
    weights: CompareWeights = Field(default_factory=CompareWeights)
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: int | None = Field(default=None, gt=0)
    cache_ttl_days: float | None = Field(default=None, gt=0)

    def cache_identity(self) -> dict[str, Any]:
        """Options as they participate in cache-key derivation."""
        return self.model_dump(mode="json", exclude={"cache_ttl_days"})


class ComparisonRequest(BaseModel):
    """Ordered canonical slugs plus generation options."""

    slugs: list[str]
    options: CompareOptions = Field(default_factory=CompareOptions)


class NormalizedSelection(BaseModel):
    """Result of request normalization."""

    slugs: list[str]
    unresolved: list[str] = Field(default_factory=list)

    @property
    def insufficient(self) -> bool:
        """A single item is valid but cannot really be compared."""
        return len(self.slugs) == 1


class CompareTable(BaseModel):
    """Non-AI comparison: one column per slug, aligned positionally."""

    slugs: list[str]
    names: list[str]
    fields: dict[str, list[Any]]
    labels: dict[str, str] = Field(default_factory=dict)
