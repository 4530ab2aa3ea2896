# src/llm/client_factory.py — v1
"""Provider registry: turn ``llm_provider`` / ``llm_model`` into a client.

The application builds one client at startup and shares it across requests;
adapters keep no per-request state. Adapter modules are imported only when
their provider is selected, so unused SDKs never load.
"""

from __future__ import annotations

import importlib
import logging
from typing import NamedTuple

from toolcompare.config.settings import Settings
from toolcompare.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


class ProviderSpec(NamedTuple):
    """Where the adapter lives and which Settings field holds its API key."""

    class_path: str
    api_key_field: str | None = None


_PROVIDER_REGISTRY: dict[str, ProviderSpec] = {
    "google": ProviderSpec(
        "toolcompare.llm.adapters.google_adapter.GoogleAdapter", "google_api_key"
    ),
    "anthropic": ProviderSpec(
        "toolcompare.llm.adapters.anthropic_adapter.AnthropicAdapter", "anthropic_api_key"
    ),
    "openai": ProviderSpec(
        "toolcompare.llm.adapters.openai_adapter.OpenAIAdapter", "openai_api_key"
    ),
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the adapter registered for ``provider``.

    Args:
        provider: Registered provider name (google, anthropic, openai).
        model: Model name passed to the adapter (e.g. gemini-1.5-flash).
        settings: Source of the provider API key, unless ``api_key`` is given.
        **kwargs: Extra adapter arguments.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    spec = _PROVIDER_REGISTRY.get(provider)
    if spec is None:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(available_providers())}"
        )

    init_kwargs = {**kwargs, "model": model}
    if settings is not None and spec.api_key_field and "api_key" not in init_kwargs:
        api_key = getattr(settings, spec.api_key_field, "")
        if not api_key:
            logger.warning(
                "No API key configured for provider %s (%s is empty)",
                provider, spec.api_key_field.upper(),
            )
        init_kwargs["api_key"] = api_key

    adapter_cls = _import_class(spec.class_path)
    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def create_default_client(settings: Settings) -> BaseLLMClient:
    """Client for the provider and model configured in settings."""
    return create_llm_client(settings.llm_provider, settings.llm_model, settings)


def register_provider(name: str, class_path: str, api_key_field: str | None = None) -> None:
    """Register an extra adapter.

    Args:
        name: Provider identifier used in ``LLM_PROVIDER``.
        class_path: Fully qualified BaseLLMClient subclass.
        api_key_field: Settings attribute holding its API key, if any.
    """
    _PROVIDER_REGISTRY[name] = ProviderSpec(class_path, api_key_field)
    logger.info("Registered LLM provider: %s -> %s", name, class_path)


def available_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)
