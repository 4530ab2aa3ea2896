# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a small tool catalog, a fake LLM client and in-memory cache stores.
No external dependencies; all I/O is local or mocked.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from toolcompare.cache.memory_store import MemoryCacheStore
from toolcompare.cache.response_cache import ResponseCache
from toolcompare.catalog.base_catalog import StaticCatalogProvider
from toolcompare.catalog.snapshot import CatalogHolder, CatalogSnapshot
from toolcompare.config.settings import Settings
from toolcompare.core.models import CatalogEntry
from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.llm.models import LLMResponse, Message

VALID_COMPARISON = {
    "tldr": ["Notion AI suits teams already in Notion", "Jasper targets marketing copy"],
    "dimensions": [
        {
            "name": "Accuracy",
            "verdicts": [
                {"tool": "notion-ai", "score": 4, "evidence": "Grounded in workspace docs"},
                {"tool": "jasper", "score": 4, "evidence": "Brand voice controls"},
            ],
        }
    ],
    "pros_cons": [
        {"tool": "notion-ai", "pros": ["Inline editing"], "cons": ["Needs Notion"]},
        {"tool": "jasper", "pros": ["Templates"], "cons": ["Pricier"]},
    ],
    "who_should_choose": [{"persona": "Marketer", "pick": "jasper", "why": "Campaign templates"}],
    "decision_matrix": [{"criterion": "Already on Notion", "best": "notion-ai", "reason": "No new tool"}],
    "caveats": ["Pricing may change"],
}


# === FIXTURES: Catalog ===


@pytest.fixture
def catalog_records() -> list[dict]:
    """Raw catalog records as the catalog pipeline would publish them."""
    return [
        {
            "slug": "notion-ai",
            "name": "Notion AI",
            "tagline": "AI writing assistant inside your workspace",
            "categories": ["Writing", "Productivity"],
            "tasks": ["Summarize", "Draft"],
            "features": ["Outline builder", "Meeting notes"],
            "models": ["GPT-4"],
            "platforms": ["Web", "macOS"],
            "integrations": ["Slack"],
            "pricing": {"model": "freemium", "plans": [{"name": "Plus"}, {"name": "Business"}]},
            "vendor": {"name": "Notion Labs", "hq_country": "US"},
            "updated_at": "2024-05-01",
            "website_url": "https://notion.so",
            "aliases": ["Notion"],
        },
        {
            "slug": "jasper",
            "name": "Jasper",
            "tagline": "AI copywriting for marketing teams",
            "categories": ["Writing", "Marketing"],
            "tasks": ["Draft", "Summarize"],
            "features": ["Brand voice", "Templates"],
            "models": ["GPT-4", "Claude"],
            "alt_slugs": ["jasper-ai"],
            "short": "jsp",
            "pros_cons": {"pros": ["Templates"], "cons": ["Price"]},
        },
        {
            "slug": "google-cloud-speech-to-text",
            "name": "Google Cloud Speech-to-Text",
            "tagline": "Speech recognition API",
            "categories": ["Speech"],
            "tasks": ["Transcribe"],
            "features": ["Streaming recognition"],
            "short_slug": "gcstt",
        },
        {
            "slug": "runway",
            "name": "Runway",
            "tagline": "AI video editing",
            "categories": ["Video"],
            "tasks": ["Edit video"],
            "features": ["Green screen"],
        },
        {
            "slug": "copy-ai",
            "name": "Copy.ai",
            "tagline": "Marketing copy generator",
            "categories": ["Writing", "Marketing"],
            "tasks": ["Draft"],
            "aliases": ["copyai", "jsp"],
        },
    ]


@pytest.fixture
def catalog_entries(catalog_records: list[dict]) -> list[CatalogEntry]:
    return [CatalogEntry(**r) for r in catalog_records]


@pytest.fixture
def snapshot(catalog_entries: list[CatalogEntry]) -> CatalogSnapshot:
    return CatalogSnapshot(catalog_entries)


@pytest.fixture
def catalog_holder(catalog_entries: list[CatalogEntry]) -> CatalogHolder:
    return CatalogHolder(StaticCatalogProvider(catalog_entries))


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_records: list[dict]) -> Path:
    path = tmp_path / "tools.json"
    path.write_text(json.dumps({"tools": catalog_records}), encoding="utf-8")
    return path


# === FIXTURES: Settings / cache ===


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        cache_backend="memory",
        cache_root=tmp_path / "cache",
        llm_provider="google",
        llm_timeout_s=5.0,
    )


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def response_cache(memory_store: MemoryCacheStore) -> ResponseCache:
    return ResponseCache(memory_store)


# === FIXTURES: Fake LLM ===


class FakeLLMClient(BaseLLMClient):
    """Deterministic BaseLLMClient recording every call."""

    def __init__(
        self,
        content: str = json.dumps(VALID_COMPARISON),
        chunks: tuple[str, ...] = ("## TL;DR\n", "- Notion AI", " vs Jasper\n"),
        error: Exception | None = None,
        stream_error: Exception | None = None,
    ) -> None:
        self.content = content
        self.chunks = chunks
        self.error = error
        self.stream_error = stream_error
        self.complete_calls = 0
        self.stream_calls = 0
        self.last_system: str | None = None
        self.last_messages: list[Message] = []
        self.last_json_mode: bool | None = None

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        self.complete_calls += 1
        self.last_system = system
        self.last_messages = messages
        self.last_json_mode = json_mode
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.content,
            input_tokens=120,
            output_tokens=80,
            model="fake-model",
            provider="fake",
            latency_ms=5,
        )

    async def stream(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
    ) -> AsyncIterator[str]:
        self.stream_calls += 1
        self.last_system = system
        self.last_messages = messages
        for chunk in self.chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "fake-model"


@pytest.fixture
def fake_llm_cls() -> type[FakeLLMClient]:
    """The FakeLLMClient class, for tests that need custom behavior."""
    return FakeLLMClient


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def valid_comparison() -> dict:
    return json.loads(json.dumps(VALID_COMPARISON))
