"""Metrics hook protocol and no-op default implementation.

notiontree emits counters and timings while talking to Notion, walking
block trees, and snapshotting assets.  The default :class:`NoopMetricsHook`
discards everything; pass any object satisfying :class:`MetricsHook` as
``NotiontreeConfig(metrics=...)`` to forward them to StatsD, Prometheus, etc.

Emitted metric names:

* ``notiontree.requests_total``            -- counter
* ``notiontree.retries_total``             -- counter
* ``notiontree.rate_limited_total``        -- counter
* ``notiontree.request_duration_ms``       -- timing
* ``notiontree.rate_limit_wait_ms``        -- timing
* ``notiontree.blocks_materialized_total`` -- counter
* ``notiontree.blocks_skipped_total``      -- counter
* ``notiontree.subtree_failures_total``    -- counter
* ``notiontree.asset_cache_hits_total``    -- counter
* ``notiontree.asset_downloads_total``     -- counter
* ``notiontree.asset_failures_total``      -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are string key/value pairs; backends map them onto whatever
    labelling scheme they support.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...


class NoopMetricsHook:
    """Metrics backend that drops every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
