"""
Tests for the aiocache-backed secondary search index.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiocache import Cache

from curriculum_backend.search.index import SearchIndex


@pytest.mark.unit
class TestSearchIndex:

    @pytest.mark.asyncio
    async def test_index_and_get(self, search_index):
        await search_index.index(1, {"id": 1, "description": "foobar"})
        assert await search_index.get(1) == {"id": 1, "description": "foobar"}

    @pytest.mark.asyncio
    async def test_index_replaces_document(self, search_index):
        await search_index.index(1, {"id": 1, "description": "foobar"})
        await search_index.index(1, {"id": 1, "description": "baz"})

        assert await search_index.get(1) == {"id": 1, "description": "baz"}
        assert await search_index.query("ba") == [{"id": 1, "description": "baz"}]

    @pytest.mark.asyncio
    async def test_query_substring(self, search_index):
        await search_index.index(1, {"id": 1, "description": "foobar"})
        await search_index.index(2, {"id": 2, "description": "baz"})

        assert await search_index.query("foo") == [{"id": 1, "description": "foobar"}]
        assert await search_index.query("foo", fields=["title"]) == []
        assert await search_index.query("nothing") == []

    @pytest.mark.asyncio
    async def test_delete_by_id(self, search_index):
        await search_index.index(1, {"id": 1, "description": "foobar"})
        await search_index.delete_by_id(1)

        assert await search_index.get(1) is None
        assert await search_index.query("foo") == []

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_noop(self, search_index):
        await search_index.delete_by_id(42)
        assert await search_index.query("") == []

    @pytest.mark.asyncio
    async def test_namespaces_are_isolated(self):
        cache = Cache(Cache.MEMORY)
        courses = SearchIndex(cache, "isolated-courses")
        programs = SearchIndex(cache, "isolated-programs")

        await courses.index(1, {"id": 1, "name": "shared"})

        assert await programs.get(1) is None
        assert await programs.query("shared") == []

    @pytest.mark.asyncio
    async def test_clear(self, search_index):
        await search_index.index(1, {"id": 1, "description": "foobar"})
        await search_index.index(2, {"id": 2, "description": "baz"})
        await search_index.clear()

        assert await search_index.get(1) is None
        assert await search_index.query("") == []


class RoundTripCache:
    """Memory cache that yields to the event loop on every call, like a network backend."""

    def __init__(self):
        self.cache = Cache(Cache.MEMORY)

    async def get(self, key):
        await asyncio.sleep(0)
        return await self.cache.get(key)

    async def set(self, key, value):
        await asyncio.sleep(0)
        return await self.cache.set(key, value)

    async def delete(self, key):
        await asyncio.sleep(0)
        return await self.cache.delete(key)

    async def multi_get(self, keys):
        await asyncio.sleep(0)
        return await self.cache.multi_get(keys)


@pytest.mark.unit
class TestConcurrentMembership:

    @pytest.mark.asyncio
    async def test_concurrent_index_keeps_every_id(self):
        search_index = SearchIndex(RoundTripCache(), "concurrent-index")

        await asyncio.gather(
            search_index.index(1, {"id": 1, "description": "foo one"}),
            search_index.index(2, {"id": 2, "description": "foo two"}),
            search_index.index(3, {"id": 3, "description": "foo three"}),
        )

        assert sorted(document["id"] for document in await search_index.query("foo")) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_concurrent_delete_removes_every_id(self):
        search_index = SearchIndex(RoundTripCache(), "concurrent-delete")
        for entity_id in (1, 2, 3):
            await search_index.index(entity_id, {"id": entity_id, "description": "foo"})

        await asyncio.gather(search_index.delete_by_id(1), search_index.delete_by_id(2))

        assert [document["id"] for document in await search_index.query("foo")] == [3]

    @pytest.mark.asyncio
    async def test_clear_after_concurrent_index(self):
        cache = RoundTripCache()
        search_index = SearchIndex(cache, "concurrent-clear")

        await asyncio.gather(*(search_index.index(i, {"id": i, "description": "foo"}) for i in range(5)))
        await search_index.clear()

        assert await cache.multi_get([search_index._doc_key(i) for i in range(5)]) == [None] * 5

    @pytest.mark.asyncio
    async def test_redis_backend_uses_set_commands(self):
        cache = MagicMock()
        cache.NAME = "redis"
        cache.set = AsyncMock()
        cache.delete = AsyncMock()
        cache.raw = AsyncMock(return_value={b"10", b"2"})
        search_index = SearchIndex(cache, "courses")

        await search_index.index(2, {"id": 2})
        await search_index.delete_by_id(10)

        cache.raw.assert_any_await("sadd", "search:courses:ids", "2")
        cache.raw.assert_any_await("srem", "search:courses:ids", "10")
        assert await search_index._ids() == ["2", "10"]
