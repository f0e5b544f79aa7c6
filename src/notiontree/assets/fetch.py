"""Network boundary for asset downloads.

:class:`AsyncAssetFetcher` downloads arbitrary URLs (typically signed S3
links handed out by Notion) and reports the outcome as a
:class:`FetchResult` instead of raising, so the cache can decide what a
failure means.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import httpx

from notiontree.config import NotiontreeConfig


class FetchFailure(str, Enum):
    """Why a download produced no content."""

    HTTP_STATUS = "http_status"
    """The server answered with a non-2xx status."""

    NETWORK = "network"
    """No usable response: timeout, DNS, connection reset, bad URL."""


@dataclass
class FetchResult:
    """Outcome of one download attempt.

    Attributes
    ----------
    url:
        The URL that was requested.
    content:
        Response body on success, else ``None``.
    status_code:
        HTTP status when a response was received.
    failure:
        ``None`` on success, otherwise the failure class.
    error:
        Human-readable detail for logs.
    """

    url: str
    content: bytes | None = None
    status_code: int | None = None
    failure: FetchFailure | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class AsyncAssetFetcher:
    """Download asset bytes without Notion credentials.

    Parameters
    ----------
    config:
        Supplies the timeout and proxy.
    client:
        Optional pre-built :class:`httpx.AsyncClient`.
    """

    def __init__(
        self,
        config: NotiontreeConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            follow_redirects=True,
        )

    async def fetch(self, url: str) -> FetchResult:
        """GET *url*, query string included.  Never raises for HTTP or
        network problems.
        """
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return FetchResult(url=url, failure=FetchFailure.NETWORK, error=str(exc))

        if not response.is_success:
            return FetchResult(
                url=url,
                status_code=response.status_code,
                failure=FetchFailure.HTTP_STATUS,
                error=f"HTTP {response.status_code}",
            )
        return FetchResult(url=url, content=response.content, status_code=response.status_code)

    async def close(self) -> None:
        await self._client.aclose()
