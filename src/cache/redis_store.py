# src/cache/redis_store.py - v2
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install docartifacts[redis].
Suitable for sharing artifacts across processes and hosts.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from docartifacts.cache.base_cache_store import BaseCacheStore
from docartifacts.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "docartifacts:cache:"
_INDEX_KEY = "docartifacts:cache:__index__"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for distributed deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install docartifacts[redis]"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return CacheEntry.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry."""
        self._client.set(f"{_KEY_PREFIX}{key}", entry.model_dump_json())
        # Index of all keys, for clear()
        self._client.sadd(_INDEX_KEY, key)

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._client.delete(f"{_KEY_PREFIX}{key}")
        self._client.srem(_INDEX_KEY, key)

    async def clear(self) -> None:
        """Remove every indexed entry."""
        for key in self._client.smembers(_INDEX_KEY):
            self._client.delete(f"{_KEY_PREFIX}{key}")
        self._client.delete(_INDEX_KEY)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
