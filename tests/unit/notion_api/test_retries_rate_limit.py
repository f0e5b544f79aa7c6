"""Tests for RetryPolicy and AsyncRateLimiter."""

from __future__ import annotations

import httpx
import pytest

from notiontree.config import NotiontreeConfig
from notiontree.notion_api.rate_limit import AsyncRateLimiter
from notiontree.notion_api.retries import RetryPolicy


class TestRetryPolicy:
    def test_from_config(self):
        cfg = NotiontreeConfig(retry_max_attempts=7, retry_base_delay=0.5, retry_max_delay=9, retry_jitter=False)
        assert RetryPolicy.from_config(cfg) == RetryPolicy(7, 0.5, 9, False)

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_retryable_statuses(self, status):
        assert RetryPolicy().retryable_status(status) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 501])
    def test_non_retryable_statuses(self, status):
        assert RetryPolicy().retryable_status(status) is False

    def test_retryable_exceptions(self):
        policy = RetryPolicy()
        assert policy.retryable_exception(httpx.ConnectError("x")) is True
        assert policy.retryable_exception(httpx.ReadTimeout("x")) is True
        assert policy.retryable_exception(httpx.RemoteProtocolError("x")) is False

    def test_attempt_budget(self):
        policy = RetryPolicy(max_attempts=3)
        assert [policy.has_attempts_left(a) for a in range(3)] == [True, True, False]

    def test_exponential_growth(self):
        policy = RetryPolicy(base_delay=1.0, max_delay=100.0, jitter=False)
        assert [policy.delay(a) for a in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_capped(self):
        assert RetryPolicy(base_delay=1.0, max_delay=5.0, jitter=False).delay(10) == 5.0

    def test_retry_after_wins(self):
        assert RetryPolicy(jitter=False).delay(3, retry_after=7.0) == 7.0

    def test_jitter_range(self):
        policy = RetryPolicy(base_delay=1.0, max_delay=60.0, jitter=True)
        for _ in range(50):
            assert 2.0 <= policy.delay(2) <= 4.0


class TestAsyncRateLimiter:
    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            AsyncRateLimiter(rate_rps=0)

    def test_invalid_burst(self):
        with pytest.raises(ValueError):
            AsyncRateLimiter(rate_rps=1.0, burst=0)

    async def test_burst_is_free(self):
        limiter = AsyncRateLimiter(rate_rps=1.0, burst=3)
        waits = [await limiter.acquire() for _ in range(3)]
        assert waits == [0.0, 0.0, 0.0]

    async def test_paced_after_burst(self):
        limiter = AsyncRateLimiter(rate_rps=100.0, burst=1)
        assert await limiter.acquire() == 0.0
        assert await limiter.acquire() > 0.0
