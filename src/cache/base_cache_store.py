# src/cache/base_cache_store.py - v1
"""Abstract cache store interface.

Stores give no transactional guarantees. Concurrent writes of the same key
carry equal values, since artifact derivation is deterministic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docartifacts.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store cache entry."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove cache entry."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""
