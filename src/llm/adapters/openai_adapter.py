# src/llm/adapters/openai_adapter.py — v1
"""OpenAI chat-completions adapter implementing BaseLLMClient."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from typing import Any

from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT models through ``openai.AsyncOpenAI``."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str = "",
        client: Any | None = None,
        **kwargs: Any,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._sdk_client = client

    def _sdk(self) -> Any:
        if self._sdk_client is None:
            import openai

            self._sdk_client = openai.AsyncOpenAI(api_key=self._api_key or None)
        return self._sdk_client

    @staticmethod
    def _chat(messages: list[Message], system: str | None) -> list[dict[str, str]]:
        chat = [{"role": "system", "content": system}] if system else []
        chat.extend({"role": m.role, "content": m.content} for m in messages)
        return chat

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        extra: dict[str, Any] = {}
        if json_mode:
            extra["response_format"] = {"type": "json_object"}

        t0 = time.monotonic()
        completion = await self._sdk().chat.completions.create(
            model=self._model,
            messages=self._chat(messages, system),
            max_tokens=max_tokens,
            temperature=temperature,
            **extra,
        )
        latency = int((time.monotonic() - t0) * 1000)

        usage = completion.usage
        return LLMResponse(
            content=completion.choices[0].message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=completion.model or self._model,
            provider="openai",
            latency_ms=latency,
        )

    async def stream(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
    ) -> AsyncIterator[str]:
        chunks = await self._sdk().chat.completions.create(
            model=self._model,
            messages=self._chat(messages, system),
            max_tokens=max_tokens,
            temperature=temperature,
            stream=True,
        )
        try:
            async for chunk in chunks:
                delta = chunk.choices[0].delta.content if chunk.choices else None
                if delta:
                    yield delta
        finally:
            await chunks.close()

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
