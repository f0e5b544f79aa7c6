"""notiontree: materialize Notion pages into typed document trees.

Public re-exports
-----------------

* **Client:** :class:`AsyncNotionContentClient`
* **Configuration:** :class:`NotiontreeConfig`
* **Errors:** Every :class:`NotiontreeError` subclass and :class:`ErrorCode`
* **Core:** :class:`TreeMaterializer`, :class:`AssetSnapshotCache`
* **Models:** :class:`Block`, :class:`BlockType`, :class:`Document` and
  :class:`Tag`; every payload class lives in :mod:`notiontree.models`

Usage::

    import asyncio
    from notiontree import AsyncNotionContentClient

    async def main():
        async with AsyncNotionContentClient(token="secret_xxx", database_id="...") as client:
            doc = await client.get_document_by_slug("hello-world")
            if doc is not None:
                blocks = await client.materialize_content(doc.page_id)

    asyncio.run(main())
"""

from __future__ import annotations

# ── Client ─────────────────────────────────────────────────────────────
from notiontree.assets import AssetSnapshotCache
from notiontree.async_client import AsyncNotionContentClient

# ── Configuration ───────────────────────────────────────────────────────
from notiontree.config import (
    DEFAULT_ASSET_EXTENSIONS,
    DEFAULT_FALLBACK_EXTENSION,
    NotiontreeConfig,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notiontree.errors import (
    ErrorCode,
    NotiontreeAuthError,
    NotiontreeConfigError,
    NotiontreeError,
    NotiontreeNetworkError,
    NotiontreeNotFoundError,
    NotiontreePermissionError,
    NotiontreeRetryExhaustedError,
    NotiontreeValidationError,
)
from notiontree.materializer import DEFAULT_BUILDERS, TreeMaterializer

# ── Models ──────────────────────────────────────────────────────────────
from notiontree.models import Block, BlockType, Document, Tag

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Client
    "AsyncNotionContentClient",
    # Configuration
    "NotiontreeConfig",
    "DEFAULT_ASSET_EXTENSIONS",
    "DEFAULT_FALLBACK_EXTENSION",
    # Error base + code enum
    "NotiontreeError",
    "ErrorCode",
    # API / transport errors
    "NotiontreeValidationError",
    "NotiontreeAuthError",
    "NotiontreePermissionError",
    "NotiontreeNotFoundError",
    "NotiontreeRetryExhaustedError",
    "NotiontreeNetworkError",
    "NotiontreeConfigError",
    # Core
    "TreeMaterializer",
    "DEFAULT_BUILDERS",
    "AssetSnapshotCache",
    # Models
    "Block",
    "BlockType",
    "Document",
    "Tag",
]
