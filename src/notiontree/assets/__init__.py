"""Local snapshots of expiring Notion-hosted media.

* :mod:`.fetch` -- downloads, reporting failures as values.
* :mod:`.cache` -- identity hashing, on-disk snapshots, URL rewriting.
"""

from __future__ import annotations

from .cache import AssetSnapshotCache
from .fetch import AsyncAssetFetcher, FetchFailure, FetchResult

__all__ = [
    "AssetSnapshotCache",
    "AsyncAssetFetcher",
    "FetchFailure",
    "FetchResult",
]
