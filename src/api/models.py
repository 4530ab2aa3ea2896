# src/api/models.py — v1
"""HTTP request/response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from toolcompare.core.models import CompareOptions


class CompareBody(BaseModel):
    """Body for the compare endpoints.

    ``ids`` accepts a list or a comma-separated string; ``tools`` and
    ``slugs`` are accepted as aliases of ``ids``.
    """

    ids: list[str] | str | None = None
    tools: list[str] | str | None = None
    slugs: list[str] | str | None = None
    options: CompareOptions = Field(default_factory=CompareOptions)

    def identifiers(self) -> list[str] | str | None:
        for value in (self.ids, self.tools, self.slugs):
            if value:
                return value
        return None


class CompareTableResponse(BaseModel):
    ok: bool = True
    slugs: list[str]
    names: list[str]
    fields: dict[str, list[Any]]
    labels: dict[str, str] = Field(default_factory=dict)
    unresolved: list[str] = Field(default_factory=list)
    insufficient: bool = False


class AiCompareResponse(BaseModel):
    ok: bool = True
    cached: bool
    key: str
    insufficient: bool = False
    unresolved: list[str] = Field(default_factory=list)
    result: dict[str, Any]


class SimilarItem(BaseModel):
    slug: str
    name: str
    score: float


class SimilarResponse(BaseModel):
    ok: bool = True
    slug: str
    results: list[SimilarItem]


class AliasConflictOut(BaseModel):
    alias: str
    kept: str
    rejected: str


class ReloadResponse(BaseModel):
    ok: bool = True
    entries: int
    alias_keys: int
    conflicts: list[AliasConflictOut] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
    version: str
    entries: int
    cache_backend: str | None
    provider: str
    model: str


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
