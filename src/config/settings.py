# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Catalog ===
    catalog_path: Path = Path("data/tools.json")

    # === Selection / similarity limits ===
    compare_limit: int = 3
    similar_limit: int = 6
    similar_min_score: float = 0.0
    max_raw_identifiers: int = 20

    # === LLM ===
    llm_provider: str = "google"
    llm_model: str = "gemini-1.5-flash"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 1600
    llm_timeout_s: float = 60.0

    # Provider API keys
    google_api_key: str = ""
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["json", "sqlite", "redis", "memory"] = "json"
    cache_root: Path = Path("data/ai-cache")
    cache_redis_url: str = ""
    cache_ttl_days: float = 7.0

    # === Streaming ===
    stream_queue_size: int = 64

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # === Server ===
    host: str = "127.0.0.1"
    port: int = 8000

    # --- Validators ---

    @field_validator("compare_limit")
    @classmethod
    def validate_compare_limit(cls, v: int) -> int:
        """A comparison holds between 1 and 10 tools."""
        if not 1 <= v <= 10:
            raise ValueError("compare_limit must be between 1 and 10")
        return v

    @field_validator("stream_queue_size", "max_raw_identifiers")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if self.cache_ttl_days <= 0:
            errors.append("CACHE_TTL_DAYS must be > 0")

        if self.max_raw_identifiers < self.compare_limit:
            errors.append("MAX_RAW_IDENTIFIERS must be >= COMPARE_LIMIT")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_days * 86400.0


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-process config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
