"""Tests for AsyncNotionContentClient.

All Notion API calls are mocked so that these tests run entirely offline.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
from factories import paragraph, raw_block, span

from notiontree.async_client import AsyncNotionContentClient
from notiontree.config import NotiontreeConfig
from notiontree.documents import DATE_DESCENDING, PUBLISHED_FILTER
from notiontree.errors import NotiontreeAuthError, NotiontreeRetryExhaustedError
from notiontree.models import BlockType
from notiontree.observability import MetricsHook

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _row(page_id: str, title: str | None, slug: str | None, **props) -> dict:
    properties = dict(props)
    if title is not None:
        properties["Name"] = {"type": "title", "title": [span(title)]}
    if slug is not None:
        properties["Slug"] = {"type": "rich_text", "rich_text": [span(slug)]}
    return {"object": "page", "id": page_id, "properties": properties}


def _client(config: NotiontreeConfig, **kwargs) -> AsyncNotionContentClient:
    return AsyncNotionContentClient(config=config, logger=MagicMock(), **kwargs)


def _corrupt_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")


def _mock_http(client: AsyncNotionContentClient, handler) -> None:
    """Route the client's Notion transport through *handler*."""
    client._transport._client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=client.config.base_url,
    )


# ---------------------------------------------------------------------------
# list_documents
# ---------------------------------------------------------------------------

class TestListDocuments:
    async def test_query_arguments_and_order(self, config):
        client = _client(config)
        client._databases = AsyncMock()
        client._databases.query.return_value = [_row("p2", "Newer", "newer"), _row("p1", "Older", "older")]

        docs = await client.list_documents()

        assert [d.slug for d in docs] == ["newer", "older"]
        client._databases.query.assert_awaited_once_with(
            "db-1", filter=PUBLISHED_FILTER, sorts=DATE_DESCENDING,
        )

    async def test_rows_without_title_or_slug_skipped(self, config):
        client = _client(config)
        client._databases = AsyncMock()
        client._databases.query.return_value = [
            _row("a", "Kept", "kept"),
            _row("b", None, "no-title"),
            _row("c", "No slug", None),
        ]
        docs = await client.list_documents()
        assert [d.page_id for d in docs] == ["a"]

    async def test_missing_token_returns_empty(self, config):
        config.token = ""
        client = _client(config)
        client._databases = AsyncMock()

        assert await client.list_documents() == []
        client._databases.query.assert_not_awaited()

    async def test_missing_database_id_returns_empty(self, config):
        config.database_id = ""
        client = _client(config)
        client._databases = AsyncMock()
        assert await client.list_documents() == []
        client._databases.query.assert_not_awaited()

    async def test_api_error_returns_empty_and_logs(self, config):
        client = _client(config)
        client._databases = AsyncMock()
        client._databases.query.side_effect = NotiontreeAuthError(message="bad token")

        assert await client.list_documents() == []
        client._log.log.assert_called_once()
        fields = client._log.log.call_args.kwargs["extra"]["extra_fields"]
        assert fields["op"] == "list_documents"
        assert fields["error_code"] == "AUTH_ERROR"

    async def test_undecodable_body_returns_empty(self, config):
        client = _client(config)
        _mock_http(client, _corrupt_gzip)
        assert await client.list_documents() == []
        fields = client._log.log.call_args.kwargs["extra"]["extra_fields"]
        assert fields["error_code"] == "NETWORK_ERROR"
        await client.close()

    async def test_featured_image_snapshotted(self, config, fake_assets):
        client = _client(config)
        client._assets = fake_assets
        client._databases = AsyncMock()
        row = _row("p", "T", "t", **{"Featured Image": {"files": [
            {"type": "file", "file": {"url": "https://s3.example.com/w/u/cover.jpg?sig=1"}},
        ]}})
        client._databases.query.return_value = [row]

        docs = await client.list_documents()
        assert docs[0].featured_image == "/notion-images/cover.jpg"

    async def test_featured_image_snapshot_disabled(self, config, fake_assets):
        config.snapshot_featured_images = False
        client = _client(config)
        client._assets = fake_assets
        client._databases = AsyncMock()
        url = "https://s3.example.com/w/u/cover.jpg?sig=1"
        row = _row("p", "T", "t", **{"Featured Image": {"files": [{"type": "file", "file": {"url": url}}]}})
        client._databases.query.return_value = [row]

        docs = await client.list_documents()
        assert docs[0].featured_image == url
        assert fake_assets.calls == []


# ---------------------------------------------------------------------------
# get_document_by_slug
# ---------------------------------------------------------------------------

class TestGetDocumentBySlug:
    async def test_found(self, config):
        client = _client(config)
        client._databases = AsyncMock()
        client._databases.query.return_value = [_row("p", "Title", "my-slug")]

        doc = await client.get_document_by_slug("my-slug")

        assert doc.page_id == "p"
        kwargs = client._databases.query.call_args.kwargs
        assert kwargs["limit"] == 1
        assert kwargs["filter"]["and"][0]["rich_text"] == {"equals": "my-slug"}

    async def test_not_found(self, config):
        client = _client(config)
        client._databases = AsyncMock()
        client._databases.query.return_value = []
        assert await client.get_document_by_slug("nope") is None

    async def test_error_returns_none(self, config):
        client = _client(config)
        client._databases = AsyncMock()
        client._databases.query.side_effect = NotiontreeRetryExhaustedError(message="busy")
        assert await client.get_document_by_slug("x") is None

    async def test_undecodable_body_returns_none(self, config):
        client = _client(config)
        _mock_http(client, _corrupt_gzip)
        assert await client.get_document_by_slug("x") is None
        await client.close()

    async def test_unconfigured_returns_none(self, tmp_path):
        client = _client(NotiontreeConfig(asset_dir=str(tmp_path)))
        assert await client.get_document_by_slug("x") is None


# ---------------------------------------------------------------------------
# materialize_content
# ---------------------------------------------------------------------------

class TestMaterializeContent:
    async def test_end_to_end(self, config):
        children = {
            "page-1": [
                paragraph("a", "Intro"),
                raw_block("h", "heading_2", {"rich_text": [span("Part")]}),
                raw_block("q", "quote", {"rich_text": [span("Said")]}, has_children=True),
                raw_block("u", "unsupported", {}),
            ],
            "q": [paragraph("qc", "nested")],
        }

        def handler(request: httpx.Request) -> httpx.Response:
            container = request.url.path.split("/")[-2]
            return httpx.Response(200, json={"results": children[container], "has_more": False})

        client = _client(config)
        _mock_http(client, handler)

        blocks = await client.materialize_content("page-1")

        assert [b.type for b in blocks] == [BlockType.PARAGRAPH, BlockType.HEADING_2, BlockType.QUOTE]
        assert [c.id for c in blocks[2].children] == ["qc"]
        await client.close()

    async def test_missing_token_returns_empty(self, config):
        config.token = ""
        client = _client(config)
        assert await client.materialize_content("page-1") == []

    async def test_root_failure_returns_empty(self, config):
        client = _client(config)
        _mock_http(client, lambda r: httpx.Response(401, json={"code": "unauthorized", "message": "no"}))
        assert await client.materialize_content("page-1") == []
        await client.close()

    async def test_metrics_hook_from_config_reaches_every_layer(self, config):
        class Recorder:
            def __init__(self):
                self.names: list[str] = []

            def increment(self, name, value=1, tags=None):
                self.names.append(name)

            def timing(self, name, ms, tags=None):
                self.names.append(name)

        recorder = Recorder()
        assert isinstance(recorder, MetricsHook)
        config.metrics = recorder
        client = _client(config)
        _mock_http(
            client,
            lambda r: httpx.Response(200, json={"results": [paragraph("a", "A")], "has_more": False}),
        )

        await client.materialize_content("page-1")
        await client.close()

        assert "notiontree.requests_total" in recorder.names
        assert "notiontree.blocks_materialized_total" in recorder.names
        assert client._assets._metrics is recorder

    async def test_undecodable_body_returns_empty(self, config):
        client = _client(config)
        _mock_http(client, _corrupt_gzip)
        assert await client.materialize_content("page-1") == []
        await client.close()

    async def test_invalid_page_id_returns_empty(self, config):
        client = _client(config)
        _mock_http(client, lambda r: httpx.Response(200, json={"results": []}))
        assert await client.materialize_content("abc\x01def") == []
        await client.close()


# ---------------------------------------------------------------------------
# Construction / lifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("NOTION_API_SECRET", "secret-from-env")
        monkeypatch.setenv("DATABASE_ID", "db-env")
        monkeypatch.setenv("NOTIONTREE_ASSET_DIR", str(tmp_path))
        client = AsyncNotionContentClient.from_env()
        assert client.config.token == "secret-from-env"
        assert client.config.database_id == "db-env"

    def test_kwargs_build_config(self):
        client = AsyncNotionContentClient("tok", database_id="db")
        assert client.config.token == "tok"
        assert client.config.database_id == "db"

    async def test_context_manager_closes(self, config):
        client = _client(config)
        client._transport = AsyncMock()
        client._fetcher = AsyncMock()
        async with client:
            pass
        client._transport.close.assert_awaited_once()
        client._fetcher.close.assert_awaited_once()
