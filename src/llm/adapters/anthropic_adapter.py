# src/llm/adapters/anthropic_adapter.py — v1
"""Anthropic Claude adapter implementing BaseLLMClient.

The Messages API has no JSON switch, so JSON mode is requested through the
system prompt and validated downstream like every other provider.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from typing import Any

from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)

_JSON_ONLY = "Respond with a single JSON object and nothing else."


class AnthropicAdapter(BaseLLMClient):
    """Claude models through ``anthropic.AsyncAnthropic``."""

    def __init__(
        self,
        model: str = "claude-3-5-haiku-latest",
        api_key: str = "",
        client: Any | None = None,
        **kwargs: Any,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._sdk_client = client

    def _sdk(self) -> Any:
        if self._sdk_client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError("anthropic package required: pip install anthropic") from e
            self._sdk_client = anthropic.AsyncAnthropic(api_key=self._api_key or None)
        return self._sdk_client

    def _request(
        self,
        messages: list[Message],
        system: str | None,
        max_tokens: int,
        temperature: float,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": m.role, "content": m.content} for m in messages if m.role != "system"
            ],
        }
        if system:
            request["system"] = system
        return request

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        if json_mode:
            system = f"{system}\n{_JSON_ONLY}" if system else _JSON_ONLY
        request = self._request(messages, system, max_tokens, temperature)

        t0 = time.monotonic()
        msg = await self._sdk().messages.create(**request)
        latency = int((time.monotonic() - t0) * 1000)

        text = "".join(
            block.text for block in msg.content if getattr(block, "type", None) == "text"
        )
        if getattr(msg, "stop_reason", None) == "max_tokens":
            logger.warning("Claude output truncated at %d tokens", max_tokens)

        return LLMResponse(
            content=text,
            input_tokens=msg.usage.input_tokens,
            output_tokens=msg.usage.output_tokens,
            model=getattr(msg, "model", None) or self._model,
            provider="anthropic",
            latency_ms=latency,
        )

    async def stream(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
    ) -> AsyncIterator[str]:
        request = self._request(messages, system, max_tokens, temperature)
        # Leaving the context manager closes the HTTP stream, also on aclose().
        async with self._sdk().messages.stream(**request) as events:
            async for text in events.text_stream:
                if text:
                    yield text

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model
