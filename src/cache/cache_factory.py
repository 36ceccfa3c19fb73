# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from pathlib import Path

from docartifacts.cache.base_cache_store import BaseCacheStore
from docartifacts.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from docartifacts.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    cache_root = Path("~/.docartifacts/cache") if settings is None else settings.cache_root

    if backend == "json":
        from docartifacts.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=cache_root)

    if backend == "sqlite":
        from docartifacts.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=Path(cache_root) / "docartifacts_cache.db")

    if backend == "redis":
        from docartifacts.cache.redis_store import RedisCacheStore
        if settings is None or not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(redis_url=settings.cache_redis_url)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
