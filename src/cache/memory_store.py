# src/cache/memory_store.py - v1
"""In-process cache store (default CACHE_BACKEND=memory).

Entries are kept as serialized JSON so that a caller mutating a returned
value never alters what later lookups see.
"""

from __future__ import annotations

from docartifacts.cache.base_cache_store import BaseCacheStore
from docartifacts.cache.models import CacheEntry


class MemoryCacheStore(BaseCacheStore):
    """Dictionary-backed cache store for single-process use and tests."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        raw = self._data.get(key)
        if raw is None:
            return None
        return CacheEntry.model_validate_json(raw)

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry."""
        self._data[key] = entry.model_dump_json()

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._data.pop(key, None)

    async def clear(self) -> None:
        """Remove every entry."""
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
