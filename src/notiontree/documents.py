"""Project content-database rows onto :class:`~notiontree.models.Document`.

The database is expected to have these properties:

====================  ==============  =================================
Property              Notion type     Document field
====================  ==============  =================================
``Name``              title           ``title`` (required)
``Slug``              rich_text       ``slug`` (required)
``Date``              date            ``date`` (start, ISO string)
``Type``              select          ``type`` (default ``"blog"``)
``Show on Homepage``  checkbox        ``show_on_homepage``
``Pin Order``         number          ``pin_order`` (``None``: unpinned)
``Excerpt``           rich_text       ``excerpt``
``Featured Image``    files           ``featured_image`` (first file)
``Tags``              multi_select    ``tags``
``Published``         checkbox        query filter only
====================  ==============  =================================
"""

from __future__ import annotations

from typing import Any

from notiontree.materializer.rich_text import build_rich_texts, plain_text
from notiontree.models import Document, Tag
from notiontree.utils.timestamps import parse_timestamp

PROP_TITLE = "Name"
PROP_SLUG = "Slug"
PROP_DATE = "Date"
PROP_TYPE = "Type"
PROP_SHOW_ON_HOMEPAGE = "Show on Homepage"
PROP_PIN_ORDER = "Pin Order"
PROP_EXCERPT = "Excerpt"
PROP_FEATURED_IMAGE = "Featured Image"
PROP_TAGS = "Tags"
PROP_PUBLISHED = "Published"

PUBLISHED_FILTER: dict[str, Any] = {
    "property": PROP_PUBLISHED,
    "checkbox": {"equals": True},
}

DATE_DESCENDING: list[dict[str, Any]] = [
    {"property": PROP_DATE, "direction": "descending"},
]


def slug_filter(slug: str) -> dict[str, Any]:
    """Filter matching the published row whose ``Slug`` equals *slug*."""
    return {
        "and": [
            {"property": PROP_SLUG, "rich_text": {"equals": slug}},
            PUBLISHED_FILTER,
        ]
    }


def featured_image_source(page: dict[str, Any]) -> tuple[str, str] | None:
    """``(kind, url)`` of the first ``Featured Image`` file, if any.

    *kind* is ``"file"`` for Notion-hosted uploads and ``"external"`` for
    links.
    """
    prop = (page.get("properties") or {}).get(PROP_FEATURED_IMAGE) or {}
    files = prop.get("files") or []
    if not files:
        return None
    first = files[0]
    kind = first.get("type")
    if kind in ("file", "external"):
        url = (first.get(kind) or {}).get("url")
        if url:
            return kind, url
    return None


def build_document(page: dict[str, Any]) -> Document | None:
    """Map a database page object to a :class:`Document`.

    Returns ``None`` when the row has no ``Name`` or ``Slug`` property;
    such rows are dropped rather than filled with defaults.
    """
    props = page.get("properties") or {}
    title_prop = props.get(PROP_TITLE)
    slug_prop = props.get(PROP_SLUG)
    if not title_prop or not slug_prop:
        return None

    date_prop = props.get(PROP_DATE) or {}
    type_prop = props.get(PROP_TYPE) or {}
    show_prop = props.get(PROP_SHOW_ON_HOMEPAGE) or {}
    pin_prop = props.get(PROP_PIN_ORDER) or {}
    excerpt_prop = props.get(PROP_EXCERPT) or {}
    tags_prop = props.get(PROP_TAGS) or {}

    source = featured_image_source(page)

    return Document(
        page_id=page.get("id", ""),
        title=plain_text(build_rich_texts(title_prop.get("title"))),
        slug=plain_text(build_rich_texts(slug_prop.get("rich_text"))),
        date=(date_prop.get("date") or {}).get("start") or "",
        type=(type_prop.get("select") or {}).get("name") or "blog",
        show_on_homepage=bool(show_prop.get("checkbox", False)),
        pin_order=pin_prop.get("number"),
        excerpt=plain_text(build_rich_texts(excerpt_prop.get("rich_text"))),
        featured_image=source[1] if source else None,
        tags=[
            Tag(
                id=tag.get("id", ""),
                name=tag.get("name", ""),
                color=tag.get("color") or "default",
            )
            for tag in tags_prop.get("multi_select") or []
        ],
        last_edited_time=parse_timestamp(page.get("last_edited_time")),
    )
