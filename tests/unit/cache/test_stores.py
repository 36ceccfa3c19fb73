# tests/unit/cache/test_stores.py - v1
"""Tests for the memory, JSON and SQLite cache stores (no external services)."""

from __future__ import annotations

import pytest

from docartifacts.cache.json_store import JsonCacheStore
from docartifacts.cache.memory_store import MemoryCacheStore
from docartifacts.cache.models import CacheEntry
from docartifacts.cache.sqlite_store import SqliteCacheStore


def _entry(key: str = "k1", kind: str = "html", value=None) -> CacheEntry:
    return CacheEntry(key=key, kind=kind, value=value if value is not None else "<p>x</p>")


@pytest.fixture(params=["memory", "json", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        s = MemoryCacheStore()
    elif request.param == "json":
        s = JsonCacheStore(cache_root=tmp_path / "json")
    else:
        s = SqliteCacheStore(db_path=tmp_path / "cache.db")
    yield s
    s.close()


class TestStoreContract:
    @pytest.mark.asyncio
    async def test_set_and_get(self, store):
        await store.set("k1", _entry())
        result = await store.get("k1")
        assert result is not None
        assert result.value == "<p>x</p>"
        assert result.kind == "html"

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_overwrite(self, store):
        await store.set("k1", _entry(value="a"))
        await store.set("k1", _entry(value="b"))
        result = await store.get("k1")
        assert result.value == "b"

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.set("k1", _entry())
        await store.delete("k1")
        assert await store.get("k1") is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, store):
        await store.delete("never-set")

    @pytest.mark.asyncio
    async def test_clear(self, store):
        await store.set("k1", _entry("k1"))
        await store.set("k2", _entry("k2"))
        await store.clear()
        assert await store.get("k1") is None
        assert await store.get("k2") is None

    @pytest.mark.asyncio
    async def test_structured_value(self, store):
        value = [{"value": "Intro", "depth": 1}, {"value": None, "depth": 2}]
        await store.set("k1", _entry(kind="headings", value=value))
        result = await store.get("k1")
        assert result.value == value


class TestMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_returned_value_is_a_copy(self):
        store = MemoryCacheStore()
        await store.set("k1", _entry(kind="headings", value=[{"depth": 1}]))
        first = await store.get("k1")
        first.value.append({"depth": 2})
        second = await store.get("k1")
        assert second.value == [{"depth": 1}]

    @pytest.mark.asyncio
    async def test_len_and_contains(self):
        store = MemoryCacheStore()
        await store.set("k1", _entry())
        assert len(store) == 1
        assert "k1" in store


class TestJsonCacheStore:
    @pytest.mark.asyncio
    async def test_key_with_separators(self, tmp_path):
        store = JsonCacheStore(cache_root=tmp_path)
        key = "docartifacts:html:abc/def:fp"
        await store.set(key, _entry(key))
        assert (await store.get(key)).key == key

    @pytest.mark.asyncio
    async def test_corrupt_file_is_miss(self, tmp_path):
        store = JsonCacheStore(cache_root=tmp_path)
        await store.set("k1", _entry())
        (path,) = tmp_path.glob("*.json")
        path.write_text("{not json", encoding="utf-8")
        assert await store.get("k1") is None


class TestSqliteCacheStore:
    @pytest.mark.asyncio
    async def test_count_by_kind(self, tmp_path):
        store = SqliteCacheStore(db_path=tmp_path / "c.db")
        await store.set("k1", _entry("k1", kind="html"))
        await store.set("k2", _entry("k2", kind="toc", value=""))
        assert store.count() == 2
        assert store.count("toc") == 1
        store.close()

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path):
        db = tmp_path / "c.db"
        first = SqliteCacheStore(db_path=db)
        await first.set("k1", _entry())
        first.close()
        second = SqliteCacheStore(db_path=db)
        assert (await second.get("k1")).value == "<p>x</p>"
        second.close()
