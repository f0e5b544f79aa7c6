"""Client-side pacing for Notion API requests.

Notion allows an average of three requests per second per integration and
answers bursts beyond that with 429.  :class:`AsyncRateLimiter` spaces
requests out before they are sent, using the generic cell rate algorithm:
a single "theoretical arrival time" replaces an explicit token count, and
up to ``burst`` requests may run ahead of the steady rate.
"""

from __future__ import annotations

import asyncio
import time


class AsyncRateLimiter:
    """Coroutine-safe request pacer.

    Parameters
    ----------
    rate_rps:
        Sustained requests per second.
    burst:
        Requests allowed back to back before pacing kicks in.
    """

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")
        self._interval = 1.0 / rate_rps
        self._tolerance = (burst - 1) * self._interval
        self._arrival = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """Wait for the next free slot; return the seconds waited."""
        async with self._lock:
            now = time.monotonic()
            arrival = max(self._arrival, now)
            wait = max(0.0, arrival - self._tolerance - now)
            self._arrival = arrival + self._interval
        if wait > 0:
            await asyncio.sleep(wait)
        return wait
