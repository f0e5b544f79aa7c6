"""Tests for the AsyncBlockAPI and AsyncDatabaseAPI endpoint wrappers."""

from __future__ import annotations

import json

import httpx
import pytest

from notiontree.errors import NotiontreeNotFoundError
from notiontree.notion_api.blocks import AsyncBlockAPI
from notiontree.notion_api.databases import AsyncDatabaseAPI
from notiontree.notion_api.transport import AsyncNotionTransport


def _transport(config, handler) -> AsyncNotionTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=config.base_url)
    return AsyncNotionTransport(config, client=client)


def _pages(*pages):
    """Handler serving *pages* in sequence; records requests on ``.seen``."""
    queue = list(pages)
    seen: list[httpx.Request] = []

    def handler(request):
        seen.append(request)
        results, more = queue.pop(0)
        return httpx.Response(
            200,
            json={"results": results, "has_more": more, "next_cursor": "c" if more else None},
        )

    handler.seen = seen
    return handler


class TestAsyncBlockAPI:
    async def test_list_children_path_and_order(self, config):
        handler = _pages(([{"id": "1"}, {"id": "2"}], True), ([{"id": "3"}], False))
        api = AsyncBlockAPI(_transport(config, handler))

        children = await api.list_children("page-1")

        assert [c["id"] for c in children] == ["1", "2", "3"]
        assert handler.seen[0].method == "GET"
        assert handler.seen[0].url.path == "/v1/blocks/page-1/children"

    async def test_iter_children(self, config):
        api = AsyncBlockAPI(_transport(config, _pages(([{"id": "x"}], False))))
        assert [c["id"] async for c in api.iter_children("b")] == ["x"]

    async def test_empty(self, config):
        api = AsyncBlockAPI(_transport(config, _pages(([], False))))
        assert await api.list_children("b") == []

    async def test_error_propagates(self, config):
        def handler(request):
            return httpx.Response(404, json={"code": "object_not_found", "message": "missing"})

        api = AsyncBlockAPI(_transport(config, handler))
        with pytest.raises(NotiontreeNotFoundError):
            await api.list_children("gone")


class TestAsyncDatabaseAPI:
    async def test_query_body(self, config):
        handler = _pages(([{"id": "r1"}], False))
        api = AsyncDatabaseAPI(_transport(config, handler))

        rows = await api.query(
            "db-1",
            filter={"property": "Published", "checkbox": {"equals": True}},
            sorts=[{"property": "Date", "direction": "descending"}],
        )

        assert rows == [{"id": "r1"}]
        request = handler.seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/databases/db-1/query"
        body = json.loads(request.content)
        assert body["filter"]["property"] == "Published"
        assert body["sorts"][0]["direction"] == "descending"

    async def test_query_without_filter(self, config):
        handler = _pages(([], False))
        await AsyncDatabaseAPI(_transport(config, handler)).query("db-1")
        body = json.loads(handler.seen[0].content)
        assert "filter" not in body
        assert "sorts" not in body

    async def test_query_walks_all_pages(self, config):
        handler = _pages(([{"id": "a"}], True), ([{"id": "b"}], False))
        rows = await AsyncDatabaseAPI(_transport(config, handler)).query("db-1")
        assert [r["id"] for r in rows] == ["a", "b"]

    async def test_limit_stops_early(self, config):
        handler = _pages(([{"id": "a"}, {"id": "b"}], True), ([{"id": "c"}], False))
        rows = await AsyncDatabaseAPI(_transport(config, handler)).query("db-1", limit=1)
        assert [r["id"] for r in rows] == ["a"]
        assert len(handler.seen) == 1
