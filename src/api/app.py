# src/api/app.py — v1
"""Application factory.

Usage:
    from toolcompare.api.app import create_app
    app = create_app()

Every shared object (catalog holder, response cache, LLM client, comparison
service) is constructed here and stored on ``app.state``; nothing lives in
module globals. Collaborators can be injected for tests.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from toolcompare.api.models import ErrorResponse
from toolcompare.api.routes import router
from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.cache.cache_factory import create_cache_store
from toolcompare.cache.response_cache import ResponseCache
from toolcompare.catalog.base_catalog import BaseCatalogProvider
from toolcompare.catalog.json_catalog import JsonCatalogProvider
from toolcompare.catalog.snapshot import CatalogHolder
from toolcompare.config.settings import Settings
from toolcompare.core.errors import ResolutionError, UpstreamError, ValidationError
from toolcompare.generation.service import ComparisonService
from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.llm.client_factory import create_default_client
from toolcompare.logging.context import clear_context, set_request_context
from toolcompare.version import __version__

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    catalog_provider: BaseCatalogProvider | None = None,
    llm_client: BaseLLMClient | None = None,
    cache_store: BaseCacheStore | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings. Loaded from .env if None.
        catalog_provider: Catalog source. Defaults to the JSON file at
            ``settings.catalog_path``.
        llm_client: Generation client. Defaults to the configured provider.
        cache_store: Cache backend. Defaults to ``settings.cache_backend``;
            ignored when caching is disabled.
    """
    settings = settings or Settings()
    catalog = CatalogHolder(catalog_provider or JsonCatalogProvider(settings.catalog_path))
    client = llm_client or create_default_client(settings)

    response_cache: ResponseCache | None = None
    if settings.cache_enabled:
        response_cache = ResponseCache(
            cache_store or create_cache_store(settings),
            default_ttl_seconds=settings.cache_ttl_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        snapshot = catalog.snapshot
        logger.info(
            "toolcompare %s ready: %d tools, provider=%s, cache=%s",
            __version__, len(snapshot), client.provider_name,
            response_cache.store.backend_name if response_cache else "disabled",
        )
        try:
            yield
        finally:
            if response_cache is not None:
                await response_cache.close()
            logger.info("toolcompare shut down")

    app = FastAPI(title="toolcompare", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.llm_client = client
    app.state.response_cache = response_cache
    app.state.comparison_service = ComparisonService(
        catalog=catalog,
        llm_client=client,
        cache=response_cache,
        settings=settings,
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        set_request_context(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    _register_error_handlers(app)
    app.include_router(router)
    return app


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=message).model_dump(),
        status_code=status,
        headers={"Cache-Control": "no-store"},
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("Rejected request: %s", exc)
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(400, f"Invalid request: {detail}")

    @app.exception_handler(ResolutionError)
    async def _resolution(request: Request, exc: ResolutionError) -> JSONResponse:
        logger.info("Unresolved selection: %s", exc)
        return _error(404, str(exc))

    @app.exception_handler(UpstreamError)
    async def _upstream(request: Request, exc: UpstreamError) -> JSONResponse:
        return _error(502, f"AI comparison failed: {exc}")
