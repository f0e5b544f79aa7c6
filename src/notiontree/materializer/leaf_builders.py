"""Builders for kinds that never have children.

Media kinds (image, video, audio, file) route their URL through the asset
cache; everything else is a straight field projection with defaults.
"""

from __future__ import annotations

from typing import Any

from notiontree.models import (
    Audio,
    Bookmark,
    Code,
    Divider,
    Embed,
    Equation,
    External,
    File,
    FileObject,
    Image,
    LinkBlock,
    LinkPreview,
    LinkToPage,
    MediaBlock,
    TableOfContents,
    Video,
)

from .context import BuildContext, block_data
from .rich_text import build_rich_texts

# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

async def _media(ctx: BuildContext, raw: dict[str, Any], cls: type[MediaBlock]) -> Any:
    data = block_data(raw)
    raw_file = data.get("file")
    raw_external = data.get("external")
    file_obj = (
        FileObject(url=raw_file.get("url", ""), expiry_time=raw_file.get("expiry_time"))
        if raw_file
        else None
    )
    external = External(url=raw_external.get("url", "")) if raw_external else None
    media_type = data.get("type", "external")

    url = await ctx.resolve_asset(
        media_type,
        internal_url=file_obj.url if file_obj else None,
        external_url=external.url if external else None,
    )
    return cls(
        caption=build_rich_texts(data.get("caption")),
        type=media_type,
        file=file_obj,
        external=external,
        url=url,
    )


async def build_image(ctx: BuildContext, raw: dict[str, Any]) -> Image:
    return await _media(ctx, raw, Image)


async def build_video(ctx: BuildContext, raw: dict[str, Any]) -> Video:
    return await _media(ctx, raw, Video)


async def build_audio(ctx: BuildContext, raw: dict[str, Any]) -> Audio:
    return await _media(ctx, raw, Audio)


async def build_file(ctx: BuildContext, raw: dict[str, Any]) -> File:
    return await _media(ctx, raw, File)


# ---------------------------------------------------------------------------
# Text-ish leaves
# ---------------------------------------------------------------------------

async def build_code(ctx: BuildContext, raw: dict[str, Any]) -> Code:
    data = block_data(raw)
    return Code(
        rich_texts=build_rich_texts(data.get("rich_text")),
        caption=build_rich_texts(data.get("caption")),
        language=data.get("language") or "plaintext",
    )


async def build_equation(ctx: BuildContext, raw: dict[str, Any]) -> Equation:
    return Equation(expression=block_data(raw).get("expression") or "")


def _link_block(raw: dict[str, Any], cls: type[LinkBlock]) -> Any:
    data = block_data(raw)
    return cls(caption=build_rich_texts(data.get("caption")), url=data.get("url") or "")


async def build_embed(ctx: BuildContext, raw: dict[str, Any]) -> Embed:
    return _link_block(raw, Embed)


async def build_bookmark(ctx: BuildContext, raw: dict[str, Any]) -> Bookmark:
    return _link_block(raw, Bookmark)


async def build_link_preview(ctx: BuildContext, raw: dict[str, Any]) -> LinkPreview:
    return _link_block(raw, LinkPreview)


# ---------------------------------------------------------------------------
# Structural leaves
# ---------------------------------------------------------------------------

async def build_table_of_contents(ctx: BuildContext, raw: dict[str, Any]) -> TableOfContents:
    return TableOfContents(color=block_data(raw).get("color") or "default")


async def build_link_to_page(ctx: BuildContext, raw: dict[str, Any]) -> LinkToPage:
    data = block_data(raw)
    link_type = data.get("type") or "page_id"
    # Database links carry their id under "database_id".
    return LinkToPage(type=link_type, page_id=data.get(link_type) or "")


async def build_divider(ctx: BuildContext, raw: dict[str, Any]) -> Divider:
    return Divider()
