"""Recursive-descent materializer for Notion block trees.

:class:`TreeMaterializer` turns a container id (a page or a block) into a
list of typed :class:`~notiontree.models.Block` objects:

1. Fetch every page of the container's direct children.
2. Dispatch each raw child on its ``type`` through a builder table.
3. Builders recurse back into :meth:`TreeMaterializer.materialize` for
   children, table rows and columns.

Failures stay local.  If any page of a container's children cannot be
fetched, that container contributes no children and the error is logged;
siblings and ancestors are unaffected.  Block kinds missing from the table
are dropped without error.

Siblings are built one after another so the output order always equals
the order Notion returned them in.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from notiontree.assets.cache import AssetSnapshotCache
from notiontree.errors import NotiontreeError
from notiontree.models import Block, BlockType
from notiontree.notion_api.blocks import AsyncBlockAPI
from notiontree.observability import MetricsHook, NoopMetricsHook, get_logger
from notiontree.utils.timestamps import parse_timestamp

from . import composite_builders, leaf_builders, text_builders
from .context import Builder

DEFAULT_BUILDERS: dict[BlockType, Builder] = {
    BlockType.PARAGRAPH: text_builders.build_paragraph,
    BlockType.HEADING_1: text_builders.build_heading_1,
    BlockType.HEADING_2: text_builders.build_heading_2,
    BlockType.HEADING_3: text_builders.build_heading_3,
    BlockType.BULLETED_LIST_ITEM: text_builders.build_bulleted_list_item,
    BlockType.NUMBERED_LIST_ITEM: text_builders.build_numbered_list_item,
    BlockType.TO_DO: text_builders.build_to_do,
    BlockType.QUOTE: text_builders.build_quote,
    BlockType.TOGGLE: text_builders.build_toggle,
    BlockType.CALLOUT: text_builders.build_callout,
    BlockType.SYNCED_BLOCK: text_builders.build_synced_block,
    BlockType.IMAGE: leaf_builders.build_image,
    BlockType.VIDEO: leaf_builders.build_video,
    BlockType.AUDIO: leaf_builders.build_audio,
    BlockType.FILE: leaf_builders.build_file,
    BlockType.CODE: leaf_builders.build_code,
    BlockType.EQUATION: leaf_builders.build_equation,
    BlockType.EMBED: leaf_builders.build_embed,
    BlockType.BOOKMARK: leaf_builders.build_bookmark,
    BlockType.LINK_PREVIEW: leaf_builders.build_link_preview,
    BlockType.TABLE_OF_CONTENTS: leaf_builders.build_table_of_contents,
    BlockType.LINK_TO_PAGE: leaf_builders.build_link_to_page,
    BlockType.DIVIDER: leaf_builders.build_divider,
    BlockType.TABLE: composite_builders.build_table,
    BlockType.COLUMN_LIST: composite_builders.build_column_list,
}
"""One builder per :class:`BlockType`."""


class TreeMaterializer:
    """Fetch and type a Notion block tree.

    Parameters
    ----------
    blocks:
        Source of raw children; anything with an async
        ``list_children(block_id)``.
    assets:
        Cache used to snapshot Notion-hosted media.
    builders:
        Dispatch table.  Defaults to :data:`DEFAULT_BUILDERS`.  Keys
        outside :class:`BlockType` are never consulted.
    logger:
        Destination for fetch-failure warnings.
    metrics:
        Optional :class:`~notiontree.observability.MetricsHook`.
    """

    def __init__(
        self,
        blocks: AsyncBlockAPI,
        assets: AssetSnapshotCache,
        *,
        builders: Mapping[BlockType, Builder] | None = None,
        logger: logging.Logger | None = None,
        metrics: MetricsHook | None = None,
    ) -> None:
        self._blocks = blocks
        self._assets = assets
        self._builders = dict(DEFAULT_BUILDERS if builders is None else builders)
        self._log = logger or get_logger("notiontree.materializer")
        self._metrics = metrics if metrics is not None else NoopMetricsHook()

    async def materialize(self, container_id: str) -> list[Block]:
        """Return the typed subtree under *container_id*.

        Never raises for remote failures: an unreadable container yields
        ``[]``.
        """
        result: list[Block] = []
        for raw in await self.fetch_children(container_id):
            block = await self.build_block(raw)
            if block is not None:
                result.append(block)
        return result

    async def fetch_children(self, container_id: str) -> list[dict[str, Any]]:
        """Every raw child of *container_id* across all pages.

        A failure on any page discards what was already fetched and
        returns ``[]``.
        """
        try:
            return await self._blocks.list_children(container_id)
        except NotiontreeError as exc:
            self._metrics.increment("notiontree.subtree_failures_total")
            self._log.warning(
                "Block children fetch failed",
                extra={
                    "extra_fields": {
                        "op": "materialize",
                        "container_id": container_id,
                        "error_code": exc.code,
                        "error": exc.message,
                    }
                },
            )
            return []

    async def build_block(self, raw: dict[str, Any]) -> Block | None:
        """Build one raw block; ``None`` if its kind is unsupported."""
        kind = raw.get("type", "")
        try:
            block_type = BlockType(kind)
        except ValueError:
            block_type = None
        builder = self._builders.get(block_type) if block_type is not None else None

        if block_type is None or builder is None:
            self._metrics.increment("notiontree.blocks_skipped_total", tags={"type": str(kind)})
            self._log.debug(
                "Skipping unsupported block",
                extra={"extra_fields": {"block_id": raw.get("id"), "type": kind}},
            )
            return None

        payload = await builder(self, raw)
        self._metrics.increment("notiontree.blocks_materialized_total", tags={"type": kind})
        return Block(
            id=raw.get("id", ""),
            type=block_type,
            payload=payload,
            has_children=bool(raw.get("has_children", False)),
            last_edited_time=parse_timestamp(raw.get("last_edited_time")),
        )

    async def resolve_asset(
        self,
        kind: str,
        internal_url: str | None = None,
        external_url: str | None = None,
    ) -> str:
        return await self._assets.resolve(kind, internal_url, external_url)
