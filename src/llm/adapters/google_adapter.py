# src/llm/adapters/google_adapter.py — v1
"""Google Gemini adapter implementing BaseLLMClient.

Uses google-generativeai SDK. Default provider.
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from typing import Any

from toolcompare.llm.base_client import BaseLLMClient
from toolcompare.llm.models import LLMResponse, Message


class GoogleAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(self, model: str = "gemini-1.5-flash", api_key: str = "", **kwargs: Any):
        self._model = model
        self._api_key = api_key

    def _generative_model(self, system: str | None) -> Any:
        import google.generativeai as genai

        genai.configure(api_key=self._api_key)
        return genai.GenerativeModel(self._model, system_instruction=system)

    @staticmethod
    def _contents(messages: list[Message]) -> list[dict[str, Any]]:
        contents = []
        for m in messages:
            role = "model" if m.role == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": m.content}]})
        return contents

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        model = self._generative_model(system)
        gen_config: dict[str, Any] = {
            "max_output_tokens": max_tokens,
            "temperature": temperature,
        }
        if json_mode:
            gen_config["response_mime_type"] = "application/json"

        t0 = time.monotonic()
        resp = await model.generate_content_async(
            self._contents(messages), generation_config=gen_config,
        )
        latency = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage_metadata", None)
        return LLMResponse(
            content=resp.text or "",
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            model=self._model,
            provider="google",
            latency_ms=latency,
        )

    async def stream(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1600,
        temperature: float = 0.3,
    ) -> AsyncIterator[str]:
        model = self._generative_model(system)
        resp = await model.generate_content_async(
            self._contents(messages),
            generation_config={"max_output_tokens": max_tokens, "temperature": temperature},
            stream=True,
        )
        async for chunk in resp:
            text = getattr(chunk, "text", "")
            if text:
                yield text

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def model_name(self) -> str:
        return self._model
