"""Tests for notiontree.assets.fetch.AsyncAssetFetcher."""

from __future__ import annotations

import httpx

from notiontree.assets.fetch import AsyncAssetFetcher, FetchFailure


def _fetcher(config, handler) -> AsyncAssetFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncAssetFetcher(config, client=client)


class TestFetch:
    async def test_success(self, config):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, content=b"image-bytes")

        fetcher = _fetcher(config, handler)
        result = await fetcher.fetch("https://s3.example.com/a.png?sig=1")

        assert result.ok
        assert result.content == b"image-bytes"
        assert result.status_code == 200
        assert seen == ["https://s3.example.com/a.png?sig=1"]
        await fetcher.close()

    async def test_no_auth_header_sent(self, config):
        headers = {}

        def handler(request):
            headers.update(request.headers)
            return httpx.Response(200, content=b"x")

        await _fetcher(config, handler).fetch("https://s3.example.com/a.png")
        assert "authorization" not in headers

    async def test_http_error_status(self, config):
        fetcher = _fetcher(config, lambda request: httpx.Response(403, content=b"AccessDenied"))
        result = await fetcher.fetch("https://s3.example.com/a.png")

        assert not result.ok
        assert result.failure is FetchFailure.HTTP_STATUS
        assert result.status_code == 403
        assert result.content is None

    async def test_network_error(self, config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await _fetcher(config, handler).fetch("https://s3.example.com/a.png")

        assert result.failure is FetchFailure.NETWORK
        assert result.status_code is None
        assert "connection refused" in result.error

    async def test_timeout(self, config):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = await _fetcher(config, handler).fetch("https://s3.example.com/a.png")
        assert result.failure is FetchFailure.NETWORK
