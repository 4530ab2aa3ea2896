# src/cache/cache_factory.py — v1
"""Factory for cache store instantiation."""

from __future__ import annotations

from toolcompare.cache.base_cache_store import BaseCacheStore
from toolcompare.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to JSON backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "json" if settings is None else settings.cache_backend
    cache_root = "data/ai-cache" if settings is None else str(settings.cache_root)

    if backend == "json":
        from toolcompare.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=cache_root)

    if backend == "sqlite":
        from toolcompare.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=f"{cache_root}/toolcompare_cache.db")

    if backend == "memory":
        from toolcompare.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if backend == "redis":
        from toolcompare.cache.redis_store import RedisCacheStore
        if settings is None or not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(redis_url=settings.cache_redis_url)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
