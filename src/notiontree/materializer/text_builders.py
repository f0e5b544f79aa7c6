"""Builders for text-bearing container kinds.

Each builder reads the block's rich text and color and, when the block
declares descendants, materializes its children.  ``toggle`` fetches its
children even when ``has_children`` is false: Notion has been seen to
under-report the flag on toggles.
"""

from __future__ import annotations

from typing import Any

from notiontree.models import (
    Block,
    BulletedListItem,
    Callout,
    FileIcon,
    Heading,
    Heading1,
    Heading2,
    Heading3,
    Icon,
    NumberedListItem,
    Paragraph,
    Quote,
    SyncedBlock,
    SyncedFrom,
    TextBlock,
    ToDo,
    Toggle,
)

from .context import BuildContext, block_data
from .rich_text import build_rich_texts, build_static_icon


async def child_blocks(
    ctx: BuildContext,
    raw: dict[str, Any],
    *,
    always: bool = False,
) -> list[Block] | None:
    """Children of *raw*, or ``None`` when it has none to fetch."""
    if always or raw.get("has_children"):
        return await ctx.materialize(raw.get("id", ""))
    return None


async def _text_block(
    ctx: BuildContext,
    raw: dict[str, Any],
    cls: type[TextBlock],
    **extra: Any,
) -> Any:
    data = block_data(raw)
    return cls(
        rich_texts=build_rich_texts(data.get("rich_text")),
        color=data.get("color") or "default",
        children=await child_blocks(ctx, raw),
        **extra,
    )


async def build_paragraph(ctx: BuildContext, raw: dict[str, Any]) -> Paragraph:
    return await _text_block(ctx, raw, Paragraph)


async def _heading(ctx: BuildContext, raw: dict[str, Any], cls: type[Heading]) -> Any:
    data = block_data(raw)
    return await _text_block(ctx, raw, cls, is_toggleable=bool(data.get("is_toggleable", False)))


async def build_heading_1(ctx: BuildContext, raw: dict[str, Any]) -> Heading1:
    return await _heading(ctx, raw, Heading1)


async def build_heading_2(ctx: BuildContext, raw: dict[str, Any]) -> Heading2:
    return await _heading(ctx, raw, Heading2)


async def build_heading_3(ctx: BuildContext, raw: dict[str, Any]) -> Heading3:
    return await _heading(ctx, raw, Heading3)


async def build_bulleted_list_item(ctx: BuildContext, raw: dict[str, Any]) -> BulletedListItem:
    return await _text_block(ctx, raw, BulletedListItem)


async def build_numbered_list_item(ctx: BuildContext, raw: dict[str, Any]) -> NumberedListItem:
    return await _text_block(ctx, raw, NumberedListItem)


async def build_to_do(ctx: BuildContext, raw: dict[str, Any]) -> ToDo:
    data = block_data(raw)
    return await _text_block(ctx, raw, ToDo, checked=bool(data.get("checked", False)))


async def build_quote(ctx: BuildContext, raw: dict[str, Any]) -> Quote:
    return await _text_block(ctx, raw, Quote)


async def build_toggle(ctx: BuildContext, raw: dict[str, Any]) -> Toggle:
    data = block_data(raw)
    return Toggle(
        rich_texts=build_rich_texts(data.get("rich_text")),
        color=data.get("color") or "default",
        children=await child_blocks(ctx, raw, always=True),
    )


async def build_icon(ctx: BuildContext, raw: dict[str, Any] | None) -> Icon | None:
    """Build a callout icon, snapshotting Notion-hosted icon files."""
    if raw and raw.get("type") == "file":
        file_data = raw.get("file") or {}
        source_url = file_data.get("url", "")
        return FileIcon(
            url=await ctx.resolve_asset("file", internal_url=source_url),
            expiry_time=file_data.get("expiry_time"),
            source_url=source_url,
        )
    return build_static_icon(raw)


async def build_callout(ctx: BuildContext, raw: dict[str, Any]) -> Callout:
    data = block_data(raw)
    return await _text_block(ctx, raw, Callout, icon=await build_icon(ctx, data.get("icon")))


async def build_synced_block(ctx: BuildContext, raw: dict[str, Any]) -> SyncedBlock:
    data = block_data(raw)
    source = data.get("synced_from")
    return SyncedBlock(
        synced_from=SyncedFrom(block_id=source.get("block_id", "")) if source else None,
        children=await child_blocks(ctx, raw),
    )
