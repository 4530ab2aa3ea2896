# src/api/routes.py — v1
"""FastAPI routes for tool comparison and similar-tool lookup.

Endpoint                        Method     Description
/api/compare                    GET, POST  Catalog-only comparison table
/api/compare/ai                 POST       Buffered AI comparison (cached)
/api/compare/ai/stream          POST       Streamed AI comparison (text/plain)
/api/tools/{slug}/similar       GET        Ranked similar tools
/api/admin/reload               POST       Rebuild the catalog snapshot
/api/health                     GET        Liveness + configuration summary

Services are constructed once in ``create_app`` and resolved from
``app.state`` through ``Depends``.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import StreamingResponse

from toolcompare.api.models import (
    AiCompareResponse,
    AliasConflictOut,
    CompareBody,
    CompareTableResponse,
    ErrorResponse,
    HealthResponse,
    ReloadResponse,
    SimilarItem,
    SimilarResponse,
)
from toolcompare.cache.response_cache import ResponseCache
from toolcompare.catalog.snapshot import CatalogHolder
from toolcompare.config.settings import Settings
from toolcompare.core.models import CompareTable, NormalizedSelection
from toolcompare.generation.service import ComparisonService
from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.logging.context import get_context, set_request_context
from toolcompare.similarity.engine import SimilarityEngine
from toolcompare.version import __version__

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

NO_STORE = {"Cache-Control": "no-store"}

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Missing or malformed identifiers"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "No identifier resolved"}}
_UPSTREAM = {502: {"model": ErrorResponse, "description": "Generation failed"}}


# --- Dependency helpers ---


def _get_service(request: Request) -> ComparisonService:
    return request.app.state.comparison_service


def _get_catalog(request: Request) -> CatalogHolder:
    return request.app.state.catalog


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


ServiceDep = Annotated[ComparisonService, Depends(_get_service)]
CatalogDep = Annotated[CatalogHolder, Depends(_get_catalog)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]


def _table_response(
    selection: NormalizedSelection, table: CompareTable
) -> CompareTableResponse:
    return CompareTableResponse(
        slugs=table.slugs,
        names=table.names,
        fields=table.fields,
        labels=table.labels,
        unresolved=selection.unresolved,
        insufficient=selection.insufficient,
    )


def _set_mode(mode: str) -> None:
    ctx = get_context()
    set_request_context(ctx.request_id or "-", mode)


# --- Comparison ---


@router.get("/compare", response_model=CompareTableResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def compare_table_get(
    service: ServiceDep,
    tools: Annotated[str | None, Query(description="Comma-separated slugs or aliases")] = None,
    ids: Annotated[list[str] | None, Query()] = None,
) -> CompareTableResponse:
    _set_mode("table")
    selection, table = service.compare_table(ids or tools)
    return _table_response(selection, table)


@router.post("/compare", response_model=CompareTableResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def compare_table_post(body: CompareBody, service: ServiceDep) -> CompareTableResponse:
    _set_mode("table")
    selection, table = service.compare_table(body.identifiers())
    return _table_response(selection, table)


@router.post(
    "/compare/ai",
    response_model=AiCompareResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_UPSTREAM},
)
async def compare_ai(
    body: CompareBody, service: ServiceDep, response: Response
) -> AiCompareResponse:
    _set_mode("buffered")
    outcome = await service.compare(body.identifiers(), body.options)
    response.headers.update(NO_STORE)
    return AiCompareResponse(
        cached=outcome.cached,
        key=outcome.cache_key,
        insufficient=outcome.selection.insufficient,
        unresolved=outcome.selection.unresolved,
        result=outcome.payload,
    )


@router.post("/compare/ai/stream", responses={**_BAD_REQUEST, **_NOT_FOUND})
async def compare_ai_stream(body: CompareBody, service: ServiceDep) -> StreamingResponse:
    _set_mode("stream")
    options = body.options
    if "format" not in options.model_fields_set:
        options = options.model_copy(update={"format": "markdown"})
    chunks = service.stream(body.identifiers(), options)
    return StreamingResponse(
        chunks,
        media_type="text/plain; charset=utf-8",
        headers=NO_STORE,
    )


# --- Similarity ---


@router.get(
    "/tools/{slug}/similar",
    response_model=SimilarResponse,
    responses={**_BAD_REQUEST, 404: {"model": ErrorResponse, "description": "Unknown tool"}},
)
async def similar_tools(
    slug: str,
    catalog: CatalogDep,
    settings: SettingsDep,
    limit: Annotated[int | None, Query(ge=0, le=50)] = None,
) -> SimilarResponse:
    snapshot = catalog.snapshot
    engine = SimilarityEngine(
        snapshot,
        default_limit=settings.similar_limit,
        min_score=settings.similar_min_score,
    )
    ranked = engine.similar_to(slug, limit)
    base = snapshot.lookup(slug)
    return SimilarResponse(
        slug=base.slug if base else slug,
        results=[
            SimilarItem(slug=r.entry.slug, name=r.entry.name, score=round(r.score, 6))
            for r in ranked
        ],
    )


# --- Operations ---


@router.post("/admin/reload", response_model=ReloadResponse)
async def reload_catalog(catalog: CatalogDep) -> ReloadResponse:
    snapshot = catalog.refresh()
    return ReloadResponse(
        entries=len(snapshot),
        alias_keys=len(snapshot.aliases),
        conflicts=[
            AliasConflictOut(alias=c.alias, kept=c.kept, rejected=c.rejected)
            for c in snapshot.aliases.conflicts
        ],
    )


@router.get("/health", response_model=HealthResponse)
async def health(request: Request, catalog: CatalogDep) -> HealthResponse:
    cache: ResponseCache | None = request.app.state.response_cache
    client: BaseLLMClient = request.app.state.llm_client
    return HealthResponse(
        version=__version__,
        entries=len(catalog.snapshot),
        cache_backend=cache.store.backend_name if cache else None,
        provider=client.provider_name,
        model=client.model_name,
    )
