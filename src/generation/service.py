# src/generation/service.py — v1
"""Comparison orchestration: normalize -> project -> cache -> generate.

Per request state machine:

    RECEIVED -> NORMALIZED -> CACHE_HIT -> DONE
                           -> CACHE_MISS -> GENERATING -> SUCCESS -> CACHED_AND_DONE
                                                       -> FAILURE -> ERROR_RETURNED

Nothing is retried: a failed generation surfaces to the caller. Streaming
responses bypass the cache entirely.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from toolcompare.cache.fingerprint import compute_cache_key
from toolcompare.cache.response_cache import ResponseCache
from toolcompare.catalog.snapshot import CatalogHolder, CatalogSnapshot
from toolcompare.compare.normalizer import normalize_selection, parse_identifiers
from toolcompare.compare.projector import project
from toolcompare.compare.table import build_compare_table
from toolcompare.config.settings import Settings
from toolcompare.core.errors import UpstreamError
from toolcompare.core.models import (
    CatalogEntry,
    CompareOptions,
    CompareTable,
    ComparisonRequest,
    LiteProjection,
    NormalizedSelection,
)
from toolcompare.generation.prompts import build_messages, build_system_prompt
from toolcompare.generation.relay import relay_stream
from toolcompare.generation.schema import (
    ParseFailure,
    validate_json_payload,
    validate_markdown_payload,
)
from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.logging.context import set_cache_key

logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    RECEIVED = "received"
    NORMALIZED = "normalized"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    GENERATING = "generating"
    SUCCESS = "success"
    FAILURE = "failure"
    DONE = "done"
    CACHED_AND_DONE = "cached_and_done"
    ERROR_RETURNED = "error_returned"


@dataclass
class RequestTrace:
    """Ordered record of the states a request went through."""

    states: list[RequestState] = field(default_factory=lambda: [RequestState.RECEIVED])

    def advance(self, state: RequestState) -> None:
        logger.debug("Request state: %s -> %s", self.states[-1].value, state.value)
        self.states.append(state)

    @property
    def current(self) -> RequestState:
        return self.states[-1]


@dataclass(frozen=True)
class PreparedComparison:
    """Everything derived from the raw identifiers before generation."""

    selection: NormalizedSelection
    entries: list[CatalogEntry]
    projections: list[LiteProjection]
    request: ComparisonRequest
    cache_key: str

    @property
    def options(self) -> CompareOptions:
        return self.request.options


@dataclass(frozen=True)
class ComparisonOutcome:
    payload: dict[str, Any]
    cache_key: str
    cached: bool
    selection: NormalizedSelection
    trace: RequestTrace


class ComparisonService:
    """Stateless request handler over a catalog holder, a cache and an LLM client."""

    def __init__(
        self,
        catalog: CatalogHolder,
        llm_client: BaseLLMClient,
        cache: ResponseCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._catalog = catalog
        self._client = llm_client
        self._cache = cache
        self._settings = settings or Settings()

    # --- Selection ---

    def normalize(
        self,
        identifiers: str | Sequence[str] | None,
        snapshot: CatalogSnapshot | None = None,
    ) -> NormalizedSelection:
        """Parse and normalize raw identifiers.

        Raises:
            ValidationError: Missing or malformed identifiers.
            EmptySelection: Nothing resolved.
        """
        snapshot = snapshot or self._catalog.snapshot
        tokens = parse_identifiers(identifiers, self._settings.max_raw_identifiers)
        return normalize_selection(tokens, snapshot.aliases, self._settings.compare_limit)

    def compare_table(self, identifiers: str | Sequence[str] | None) -> tuple[NormalizedSelection, CompareTable]:
        """Non-AI comparison straight from catalog fields."""
        snapshot = self._catalog.snapshot
        selection = self.normalize(identifiers, snapshot)
        return selection, build_compare_table(snapshot.get_many(selection.slugs))

    def effective_options(self, options: CompareOptions | None) -> CompareOptions:
        """Fill unset generation options from settings."""
        opts = options or CompareOptions()
        return opts.model_copy(update={
            "model": opts.model or self._client.model_name,
            "temperature": (
                self._settings.llm_temperature if opts.temperature is None else opts.temperature
            ),
            "max_output_tokens": opts.max_output_tokens or self._settings.llm_max_tokens,
            "cache_ttl_days": opts.cache_ttl_days or self._settings.cache_ttl_days,
        })

    def prepare(
        self,
        identifiers: str | Sequence[str] | None,
        options: CompareOptions | None = None,
    ) -> PreparedComparison:
        snapshot = self._catalog.snapshot
        selection = self.normalize(identifiers, snapshot)
        entries = snapshot.get_many(selection.slugs)
        projections = project(entries)
        opts = self.effective_options(options)
        key = compute_cache_key(projections, opts)
        set_cache_key(key)
        return PreparedComparison(
            selection=selection,
            entries=entries,
            projections=projections,
            request=ComparisonRequest(slugs=selection.slugs, options=opts),
            cache_key=key,
        )

    # --- Buffered ---

    async def compare(
        self,
        identifiers: str | Sequence[str] | None,
        options: CompareOptions | None = None,
    ) -> ComparisonOutcome:
        """Buffered AI comparison, served from cache when possible.

        Raises:
            ValidationError / ResolutionError: Bad selection (before any upstream call).
            UpstreamError: Generation failed or returned an unusable payload.
        """
        trace = RequestTrace()
        prepared = self.prepare(identifiers, options)
        trace.advance(RequestState.NORMALIZED)
        ttl_seconds = prepared.options.cache_ttl_days * 86400.0  # type: ignore[operator]

        if self._cache is not None and self._settings.cache_enabled:
            cached = await self._cache.get(prepared.cache_key, ttl_seconds)
            if cached is not None:
                trace.advance(RequestState.CACHE_HIT)
                trace.advance(RequestState.DONE)
                logger.info("Comparison served from cache: %s", prepared.cache_key)
                return ComparisonOutcome(
                    payload=cached,
                    cache_key=prepared.cache_key,
                    cached=True,
                    selection=prepared.selection,
                    trace=trace,
                )
        trace.advance(RequestState.CACHE_MISS)

        trace.advance(RequestState.GENERATING)
        try:
            payload = await self._generate(prepared)
        except UpstreamError:
            trace.advance(RequestState.FAILURE)
            trace.advance(RequestState.ERROR_RETURNED)
            raise
        trace.advance(RequestState.SUCCESS)

        if self._cache is not None and self._settings.cache_enabled:
            await self._cache.put(prepared.cache_key, payload, ttl_seconds)
            trace.advance(RequestState.CACHED_AND_DONE)
        else:
            trace.advance(RequestState.DONE)

        return ComparisonOutcome(
            payload=payload,
            cache_key=prepared.cache_key,
            cached=False,
            selection=prepared.selection,
            trace=trace,
        )

    async def _generate(self, prepared: PreparedComparison) -> dict[str, Any]:
        opts = prepared.options
        fmt = opts.format
        provider = self._client.provider_name
        try:
            response = await asyncio.wait_for(
                self._client.complete(
                    build_messages(prepared.projections, fmt),
                    system=build_system_prompt(opts.weights),
                    max_tokens=opts.max_output_tokens or self._settings.llm_max_tokens,
                    temperature=opts.temperature if opts.temperature is not None else self._settings.llm_temperature,
                    json_mode=fmt == "json",
                ),
                timeout=self._settings.llm_timeout_s,
            )
        except asyncio.TimeoutError as e:
            logger.error("Generation timed out after %.1fs", self._settings.llm_timeout_s)
            raise UpstreamError("Generation timed out", provider) from e
        except Exception as e:
            logger.error("Generation failed (%s): %s", provider, e)
            raise UpstreamError(f"Generation failed: {e}", provider) from e

        result = (
            validate_json_payload(response.content)
            if fmt == "json"
            else validate_markdown_payload(response.content)
        )
        if isinstance(result, ParseFailure):
            logger.error("Unusable generation payload: %s", result.reason)
            raise UpstreamError(result.reason, provider)

        logger.info(
            "Generated comparison for %s (%d in / %d out tokens, %d ms)",
            ",".join(prepared.selection.slugs),
            response.input_tokens, response.output_tokens, response.latency_ms,
        )
        payload: dict[str, Any] = {
            "format": fmt,
            "slugs": [p.slug for p in prepared.projections],
            "names": [p.name for p in prepared.projections],
            "model": response.model or opts.model,
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }
        payload["data" if fmt == "json" else "markdown"] = result.content
        return payload

    # --- Streaming ---

    def stream(
        self,
        identifiers: str | Sequence[str] | None,
        options: CompareOptions | None = None,
    ) -> AsyncIterator[str]:
        """Start a streamed comparison.

        Selection errors are raised here, before any byte is sent. Upstream
        errors appear later as an inline marker inside the stream.
        """
        prepared = self.prepare(identifiers, options)
        opts = prepared.options
        logger.info("Streaming comparison for %s", ",".join(prepared.selection.slugs))
        upstream = self._client.stream(
            build_messages(prepared.projections, opts.format),
            system=build_system_prompt(opts.weights),
            max_tokens=opts.max_output_tokens or self._settings.llm_max_tokens,
            temperature=opts.temperature if opts.temperature is not None else self._settings.llm_temperature,
        )
        return relay_stream(
            upstream,
            maxsize=self._settings.stream_queue_size,
            idle_timeout=self._settings.llm_timeout_s,
        )
