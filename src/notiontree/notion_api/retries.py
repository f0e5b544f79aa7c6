"""When to repeat a Notion API call, and how long to wait first.

:class:`RetryPolicy` bundles the retry knobs of :class:`NotiontreeConfig`.
Notion documents 429 and the 5xx family below as transient; a request that
never got a response is retried only for timeouts and connection failures.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import httpx

from notiontree.config import NotiontreeConfig

RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and exponential backoff.

    Attributes
    ----------
    max_attempts:
        Total attempts, the first one included.
    base_delay, max_delay:
        The *n*-th retry (0-indexed) waits ``base_delay * 2**n`` seconds,
        capped at *max_delay*.
    jitter:
        Scale each wait to a random 50-100 % of itself.
    """

    max_attempts: int = 5
    base_delay: float = 1.0
    max_delay: float = 60.0
    jitter: bool = True

    @classmethod
    def from_config(cls, config: NotiontreeConfig) -> RetryPolicy:
        return cls(
            max_attempts=config.retry_max_attempts,
            base_delay=config.retry_base_delay,
            max_delay=config.retry_max_delay,
            jitter=config.retry_jitter,
        )

    def has_attempts_left(self, attempt: int) -> bool:
        """Whether 0-indexed *attempt* may be followed by another."""
        return attempt + 1 < self.max_attempts

    def retryable_status(self, status_code: int) -> bool:
        return status_code in RETRYABLE_STATUSES

    def retryable_exception(self, exc: Exception) -> bool:
        return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))

    def delay(self, attempt: int, retry_after: float | None = None) -> float:
        """Seconds to sleep after failed *attempt*.

        A server-supplied ``Retry-After`` replaces the exponential delay
        but is still jittered.
        """
        if retry_after is not None:
            seconds = retry_after
        else:
            seconds = min(self.base_delay * (2 ** attempt), self.max_delay)
        if self.jitter:
            seconds *= random.uniform(0.5, 1.0)
        return seconds
