# src/cache/artifact_cache.py - v1
"""Artifact-level view over a cache store.

Correctness never depends on the cache, only performance does: a failing
``get`` is treated as a miss and a failing ``set`` is logged and dropped.
With ``strict=True`` both surface as CacheUnavailable instead.
"""

from __future__ import annotations

import logging
from typing import Any

from docartifacts.cache.base_cache_store import BaseCacheStore
from docartifacts.cache.models import CacheEntry
from docartifacts.core.errors import CacheUnavailable

logger = logging.getLogger(__name__)


class ArtifactCache:
    """Get/set JSON-compatible artifact values by key.

    Args:
        store: Backend store. None disables caching (every get is a miss).
        strict: Raise CacheUnavailable on store failures instead of absorbing them.
    """

    def __init__(self, store: BaseCacheStore | None, strict: bool = False) -> None:
        self._store = store
        self._strict = strict

    @property
    def enabled(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> BaseCacheStore | None:
        return self._store

    async def get(self, key: str) -> Any | None:
        """Return the cached value for ``key`` or None on miss."""
        if self._store is None:
            return None
        try:
            entry = await self._store.get(key)
        except Exception as exc:
            error = CacheUnavailable(key, "get", reason=str(exc))
            if self._strict:
                raise error from exc
            logger.warning("%s; treating as cache miss", error)
            return None
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None
        logger.debug("Cache hit: %s", key)
        return entry.value

    async def set(self, key: str, kind: str, value: Any) -> None:
        """Store ``value`` under ``key``. Failures are best-effort."""
        if self._store is None:
            return
        try:
            await self._store.set(key, CacheEntry(key=key, kind=kind, value=value))
        except Exception as exc:
            error = CacheUnavailable(key, "set", reason=str(exc))
            if self._strict:
                raise error from exc
            logger.warning("%s; artifact not cached", error)
