"""Async HTTP transport for the Notion API.

Request lifecycle:

1. Wait for a pacing slot from :class:`AsyncRateLimiter`.
2. Send the request with ``Authorization`` and ``Notion-Version`` headers.
3. ``2xx`` -- return the parsed JSON body.
4. ``429`` -- honour ``Retry-After`` and retry.
5. ``5xx`` / timeout / connection failure -- exponential backoff and retry.
   Any other httpx failure (decoding, redirects, protocol, invalid URL)
   raises :class:`NotiontreeNetworkError` at once.
6. Other ``4xx`` -- raise the matching typed error immediately.
7. Attempts exhausted -- raise :class:`NotiontreeRetryExhaustedError`.

:meth:`AsyncNotionTransport.paginate` walks Notion's cursor pagination.
The response's ``has_more`` flag ends the walk; a missing ``next_cursor``
also ends it rather than re-requesting the first page.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from typing import Any

import httpx

from notiontree.config import NotiontreeConfig
from notiontree.errors import (
    NotiontreeAuthError,
    NotiontreeError,
    NotiontreeNetworkError,
    NotiontreeNotFoundError,
    NotiontreePermissionError,
    NotiontreeRetryExhaustedError,
    NotiontreeValidationError,
)
from notiontree.observability import NoopMetricsHook, get_logger

from .rate_limit import AsyncRateLimiter
from .retries import RetryPolicy

log = get_logger("notiontree.transport")

PAGE_SIZE = 100


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the typed error for a non-retryable 4xx response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    detail = body.get("message") or response.text[:500]
    context: dict[str, Any] = {
        "status_code": status,
        "notion_code": body.get("code", ""),
        "path": path,
    }
    error_cls, label = _STATUS_ERRORS.get(status, (None, None))
    if error_cls is None:
        error_cls, label = NotiontreeValidationError, f"HTTP {status}"
        context["body"] = body
    raise error_cls(f"{label} on {method} {path}: {detail}", context=context)


_STATUS_ERRORS: dict[int, tuple[type[NotiontreeError], str]] = {
    401: (NotiontreeAuthError, "unauthorized"),
    403: (NotiontreePermissionError, "forbidden"),
    404: (NotiontreeNotFoundError, "not found"),
}


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport with auth, retry, and rate limiting.

    Parameters
    ----------
    config:
        Controls the base URL, headers, retry budget, pacing and timeout.
    client:
        Optional pre-built :class:`httpx.AsyncClient`.  Tests pass one
        backed by :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        config: NotiontreeConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._pacer = AsyncRateLimiter(config.rate_limit_rps)
        self._retry = RetryPolicy.from_config(config)
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": config.notion_version,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    # -- public API --------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute a request and return the parsed JSON body.

        *kwargs* are forwarded to :meth:`httpx.AsyncClient.request`
        (``json=``, ``params=``, ``headers=``).

        Raises
        ------
        NotiontreeAuthError
            On 401 responses.
        NotiontreePermissionError
            On 403 responses.
        NotiontreeNotFoundError
            On 404 responses.
        NotiontreeValidationError
            On 400 and other non-retryable 4xx responses, and when a 2xx
            body is not a JSON object.
        NotiontreeRetryExhaustedError
            When every attempt hit 429 / 5xx.
        NotiontreeNetworkError
            On any httpx failure that cannot be retried further, including
            undecodable bodies, redirect loops and invalid URLs.
        """
        max_attempts = self._retry.max_attempts
        last_status: int | None = None
        tags = {"method": method, "path": path}

        for attempt in range(max_attempts):
            wait = await self._pacer.acquire()
            if wait > 0:
                self._metrics.timing("notiontree.rate_limit_wait_ms", wait * 1000, tags=tags)

            t0 = time.monotonic()
            try:
                response = await self._client.request(method, path, **kwargs)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                # Only timeouts and connection failures are retried.
                self._metrics.increment(
                    "notiontree.requests_total", tags={**tags, "status": "error"},
                )
                log.warning(
                    "Request network error",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "attempt": attempt + 1,
                            "error": str(exc),
                        }
                    },
                )
                retryable = self._retry.retryable_exception(exc)
                if not (retryable and self._retry.has_attempts_left(attempt)):
                    raise NotiontreeNetworkError(
                        message=f"Network error on {method} {path}: {exc}",
                        context={"url": path, "attempt": attempt + 1},
                        cause=exc,
                    ) from exc
                self._metrics.increment(
                    "notiontree.retries_total", tags={**tags, "reason": "network_error"},
                )
                await asyncio.sleep(self._retry.delay(attempt))
                continue

            elapsed_ms = (time.monotonic() - t0) * 1000
            status = response.status_code
            last_status = status
            status_tags = {**tags, "status": str(status)}
            self._metrics.increment("notiontree.requests_total", tags=status_tags)
            self._metrics.timing("notiontree.request_duration_ms", elapsed_ms, tags=status_tags)

            if 200 <= status < 300:
                if status == 204 or not response.content:
                    return {}
                try:
                    result = response.json()
                except ValueError as exc:
                    raise NotiontreeValidationError(
                        message=f"Invalid JSON in {status} response to {method} {path}",
                        context={"status_code": status, "path": path},
                        cause=exc,
                    ) from exc
                if not isinstance(result, dict):
                    raise NotiontreeValidationError(
                        message=(
                            f"Expected a JSON object in {status} response to "
                            f"{method} {path}, got {type(result).__name__}"
                        ),
                        context={"status_code": status, "path": path},
                    )
                return result

            if not self._retry.retryable_status(status):
                _raise_for_status(response, method, path)

            if not self._retry.has_attempts_left(attempt):
                break

            retry_after: float | None = None
            reason = "server_error"
            if status == 429:
                retry_after = _parse_retry_after(response)
                reason = "rate_limited"
                self._metrics.increment("notiontree.rate_limited_total", tags=tags)
                log.warning(
                    "Rate limited by Notion API",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "retry_after": retry_after,
                            "attempt": attempt + 1,
                        }
                    },
                )

            self._metrics.increment("notiontree.retries_total", tags={**tags, "reason": reason})
            await asyncio.sleep(self._retry.delay(attempt, retry_after))

        raise NotiontreeRetryExhaustedError(
            message=f"All {max_attempts} attempts exhausted for {method} {path} (last status: {last_status})",
            context={"attempts": max_attempts, "last_status_code": last_status},
        )

    async def paginate(self, path: str, **kwargs: Any) -> AsyncIterator[dict]:
        """Yield every item from a cursor-paginated list endpoint.

        ``GET`` endpoints (the default) receive ``page_size`` and
        ``start_cursor`` as query parameters; pass ``method="POST"`` for
        endpoints such as database queries, which take them in the JSON
        body.  The loop ends when a page reports ``has_more: false``, or
        when a page claims more results but carries no ``next_cursor``.
        The cursor itself is opaque.
        """
        method = kwargs.pop("method", "GET")
        body_key = "json" if method.upper() in ("POST", "PATCH") else "params"
        cursor: str | None = None

        while True:
            page_args: dict = dict(kwargs.get(body_key) or {})
            page_args["page_size"] = PAGE_SIZE
            if cursor is not None:
                page_args["start_cursor"] = cursor
            kwargs[body_key] = page_args

            data = await self.request(method, path, **kwargs)
            for item in data.get("results", []):
                yield item

            if not data.get("has_more", False):
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                log.warning(
                    "has_more without next_cursor; stopping pagination",
                    extra={"extra_fields": {"op": "paginate", "method": method, "path": path}},
                )
                break

    async def close(self) -> None:
        """Close the underlying async HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
