"""Normalize Notion rich_text arrays into :class:`~notiontree.models.RichText`.

A raw span looks like::

    {
        "type": "text",
        "text": {"content": "hello", "link": {"url": "https://example.com"}},
        "annotations": {"bold": false, "italic": false, "strikethrough": false,
                        "underline": false, "code": false, "color": "default"},
        "plain_text": "hello",
        "href": "https://example.com"
    }

``type`` is one of ``text``, ``equation`` or ``mention`` and selects which
content field of the result is filled.  The span-level ``href`` and the
text-level ``link`` are kept separately even though Notion usually sets
both to the same URL.

Everything here is pure: no I/O, output order equals input order, and
missing keys fall back to defaults instead of raising.
"""

from __future__ import annotations

from typing import Any

from notiontree.models import (
    Annotation,
    CustomEmoji,
    Emoji,
    ExternalIcon,
    InlineEquation,
    Link,
    LinkMention,
    Mention,
    PageMention,
    RichText,
    Text,
)


def build_rich_texts(spans: list[dict[str, Any]] | None) -> list[RichText]:
    """Convert a raw rich_text (or caption) array.  ``None`` yields ``[]``."""
    return [build_rich_text(span) for span in spans or []]


def build_rich_text(span: dict[str, Any]) -> RichText:
    """Convert one raw span."""
    raw_annotations = span.get("annotations") or {}
    annotation = Annotation(
        bold=bool(raw_annotations.get("bold", False)),
        italic=bool(raw_annotations.get("italic", False)),
        strikethrough=bool(raw_annotations.get("strikethrough", False)),
        underline=bool(raw_annotations.get("underline", False)),
        code=bool(raw_annotations.get("code", False)),
        color=raw_annotations.get("color") or "default",
    )

    span_type = span.get("type")
    text: Text | None = None
    equation: InlineEquation | None = None
    mention: Mention | None = None

    if span_type == "text":
        raw_text = span.get("text") or {}
        raw_link = raw_text.get("link")
        text = Text(
            content=raw_text.get("content", ""),
            link=Link(url=raw_link.get("url", "")) if raw_link else None,
        )
    elif span_type == "equation":
        equation = InlineEquation(
            expression=(span.get("equation") or {}).get("expression", ""),
        )
    elif span_type == "mention":
        mention = build_mention(span.get("mention") or {})

    return RichText(
        annotation=annotation,
        plain_text=span.get("plain_text", ""),
        href=span.get("href") or None,
        text=text,
        equation=equation,
        mention=mention,
    )


def build_mention(raw: dict[str, Any]) -> Mention:
    """Convert the ``mention`` object of a mention span.

    Page, date, link and custom-emoji mentions get their own field; other
    mention types (user, database, template) keep only their type tag.
    """
    mention_type = raw.get("type", "")

    if mention_type == "page":
        page = raw.get("page") or {}
        return Mention(
            type=mention_type,
            page=PageMention(page_id=page.get("id", ""), type=page.get("type", "page_id")),
        )

    if mention_type == "date":
        return Mention(type=mention_type, date_str=(raw.get("date") or {}).get("start"))

    if mention_type == "link_mention":
        link = raw.get("link_mention") or {}
        return Mention(
            type=mention_type,
            link_mention=LinkMention(
                href=link.get("href", ""),
                title=link.get("title"),
                description=link.get("description"),
                icon_url=link.get("icon_url"),
                link_provider=link.get("link_provider"),
                thumbnail_url=link.get("thumbnail_url"),
            ),
        )

    if mention_type == "custom_emoji":
        emoji = raw.get("custom_emoji") or {}
        return Mention(
            type=mention_type,
            custom_emoji=CustomEmoji(
                id=emoji.get("id", ""),
                name=emoji.get("name", ""),
                url=emoji.get("url", ""),
            ),
        )

    return Mention(type=mention_type)


def build_static_icon(raw: dict[str, Any] | None) -> Emoji | ExternalIcon | None:
    """Build icons that need no asset resolution.

    Returns ``None`` for a missing icon and for Notion-hosted ``file``
    icons, which the callout builder snapshots through the asset cache.
    """
    if not raw:
        return None
    icon_type = raw.get("type")
    if icon_type == "emoji":
        return Emoji(emoji=raw.get("emoji", ""))
    if icon_type == "external":
        return ExternalIcon(url=(raw.get("external") or {}).get("url", ""))
    return None


def plain_text(spans: list[RichText]) -> str:
    """Concatenate the ``plain_text`` of *spans*."""
    return "".join(span.plain_text for span in spans)
