"""The interface builders use to call back into the materializer.

Builders receive a :class:`BuildContext` instead of importing
:mod:`notiontree.materializer.tree`, so the dispatch table can reference
builders and builders can recurse without an import cycle.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from notiontree.models import Block


class BuildContext(Protocol):
    async def materialize(self, container_id: str) -> list[Block]:
        """Materialize the full subtree under *container_id*."""
        ...

    async def fetch_children(self, container_id: str) -> list[dict[str, Any]]:
        """Raw direct children of *container_id*; ``[]`` if fetching failed."""
        ...

    async def resolve_asset(
        self,
        kind: str,
        internal_url: str | None = None,
        external_url: str | None = None,
    ) -> str:
        """Stable reference for a media object (see the asset cache)."""
        ...


Builder = Callable[[BuildContext, dict[str, Any]], Awaitable[Any]]
"""``async (ctx, raw_block) -> payload``."""


def block_data(raw: dict[str, Any]) -> dict[str, Any]:
    """The kind-specific object of a raw block (``raw[raw["type"]]``)."""
    return raw.get(raw.get("type", "")) or {}
