# src/llm/base_client.py — v1
"""Abstract LLM client interface: one buffered call, one chunk stream."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from toolcompare.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Buffered text completion."""

    @abstractmethod
    def stream(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
    ) -> AsyncIterator[str]:
        """Yield text chunks as the provider produces them.

        Closing the returned iterator (``aclose()``) must release the
        underlying provider stream.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, anthropic, openai)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model the client talks to."""
