"""Typed document tree produced by notiontree.

Every node is a plain dataclass.  A :class:`Block` carries the fields
common to all Notion blocks and exactly one kind-specific ``payload``
whose class is fixed by ``Block.type``:

==========================  ===========================
``BlockType``               payload class
==========================  ===========================
``paragraph``               :class:`Paragraph`
``heading_1`` .. ``_3``     :class:`Heading1` .. :class:`Heading3`
``bulleted_list_item``      :class:`BulletedListItem`
``numbered_list_item``      :class:`NumberedListItem`
``to_do``                   :class:`ToDo`
``quote``                   :class:`Quote`
``toggle``                  :class:`Toggle`
``callout``                 :class:`Callout`
``synced_block``            :class:`SyncedBlock`
``image`` / ``video``       :class:`Image` / :class:`Video`
``audio`` / ``file``        :class:`Audio` / :class:`File`
``code``                    :class:`Code`
``equation``                :class:`Equation`
``embed``                   :class:`Embed`
``bookmark``                :class:`Bookmark`
``link_preview``            :class:`LinkPreview`
``table``                   :class:`Table`
``column_list``             :class:`ColumnList`
``table_of_contents``       :class:`TableOfContents`
``link_to_page``            :class:`LinkToPage`
``divider``                 :class:`Divider`
==========================  ===========================

Table rows and columns never appear as blocks of their own; they live
inside :class:`Table` and :class:`ColumnList`.

Rich text spans and icons are frozen: they are built once by the
normalizer and shared by reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """The closed set of block kinds the materializer understands."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    QUOTE = "quote"
    TOGGLE = "toggle"
    CALLOUT = "callout"
    SYNCED_BLOCK = "synced_block"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"
    CODE = "code"
    EQUATION = "equation"
    EMBED = "embed"
    BOOKMARK = "bookmark"
    LINK_PREVIEW = "link_preview"
    TABLE = "table"
    COLUMN_LIST = "column_list"
    TABLE_OF_CONTENTS = "table_of_contents"
    LINK_TO_PAGE = "link_to_page"
    DIVIDER = "divider"


# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotation:
    """Inline styling of one rich text span."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"


@dataclass(frozen=True)
class Link:
    url: str


@dataclass(frozen=True)
class Text:
    """Literal text content.  ``link`` is independent of the span's ``href``."""

    content: str
    link: Link | None = None


@dataclass(frozen=True)
class InlineEquation:
    expression: str


@dataclass(frozen=True)
class PageMention:
    page_id: str
    type: str = "page_id"


@dataclass(frozen=True)
class LinkMention:
    """Rich preview metadata Notion attaches to a pasted link."""

    href: str
    title: str | None = None
    description: str | None = None
    icon_url: str | None = None
    link_provider: str | None = None
    thumbnail_url: str | None = None


@dataclass(frozen=True)
class CustomEmoji:
    id: str
    name: str
    url: str


@dataclass(frozen=True)
class Mention:
    """A reference embedded in text.

    ``type`` is Notion's mention type string.  At most one of the variant
    fields is populated; mention types without a dedicated field (user,
    database, template) keep only ``type``.
    """

    type: str
    page: PageMention | None = None
    date_str: str | None = None
    link_mention: LinkMention | None = None
    custom_emoji: CustomEmoji | None = None


@dataclass(frozen=True)
class RichText:
    """One span of inline content.

    Exactly one of ``text``, ``equation`` and ``mention`` is set, chosen by
    the span's Notion ``type``.
    """

    annotation: Annotation
    plain_text: str
    href: str | None = None
    text: Text | None = None
    equation: InlineEquation | None = None
    mention: Mention | None = None


# ---------------------------------------------------------------------------
# Icons and files
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Emoji:
    emoji: str
    type: str = "emoji"


@dataclass(frozen=True)
class ExternalIcon:
    url: str
    type: str = "external"


@dataclass(frozen=True)
class FileIcon:
    """A Notion-hosted icon.

    ``url`` is the stable reference returned by the asset cache;
    ``source_url`` is the signed URL Notion handed out, valid until
    ``expiry_time``.
    """

    url: str
    expiry_time: str | None = None
    source_url: str | None = None
    type: str = "file"


Icon = Union[Emoji, ExternalIcon, FileIcon]


@dataclass
class FileObject:
    """A Notion-hosted file reference as received (signed, expiring)."""

    url: str
    expiry_time: str | None = None
    type: str = "file"


@dataclass
class External:
    url: str


# ---------------------------------------------------------------------------
# Block payloads: text-bearing containers
# ---------------------------------------------------------------------------

@dataclass
class TextBlock:
    """Base for kinds made of a rich text line plus optional children.

    ``children`` is ``None`` when the block declared no descendants and a
    (possibly empty) list otherwise.
    """

    rich_texts: list[RichText] = field(default_factory=list)
    color: str = "default"
    children: list[Block] | None = None


@dataclass
class Paragraph(TextBlock):
    pass


@dataclass
class Heading(TextBlock):
    is_toggleable: bool = False


@dataclass
class Heading1(Heading):
    pass


@dataclass
class Heading2(Heading):
    pass


@dataclass
class Heading3(Heading):
    pass


@dataclass
class BulletedListItem(TextBlock):
    pass


@dataclass
class NumberedListItem(TextBlock):
    pass


@dataclass
class ToDo(TextBlock):
    checked: bool = False


@dataclass
class Quote(TextBlock):
    pass


@dataclass
class Toggle(TextBlock):
    """Toggle blocks always carry a children list, even an empty one."""


@dataclass
class Callout(TextBlock):
    icon: Icon | None = None


@dataclass
class SyncedFrom:
    block_id: str


@dataclass
class SyncedBlock:
    """An original synced block (``synced_from is None``) or a copy that
    points at its source.  The pointer is a cross-link, not ownership.
    """

    synced_from: SyncedFrom | None = None
    children: list[Block] | None = None


# ---------------------------------------------------------------------------
# Block payloads: leaves
# ---------------------------------------------------------------------------

@dataclass
class MediaBlock:
    """Base for image, video, audio and file blocks.

    ``type`` is ``"file"`` (Notion-hosted, expiring) or ``"external"``.
    ``url`` is what renderers should use: a stable local reference for
    snapshotted files, the external URL otherwise.
    """

    caption: list[RichText] = field(default_factory=list)
    type: str = "external"
    file: FileObject | None = None
    external: External | None = None
    url: str = ""


@dataclass
class Image(MediaBlock):
    pass


@dataclass
class Video(MediaBlock):
    pass


@dataclass
class Audio(MediaBlock):
    pass


@dataclass
class File(MediaBlock):
    pass


@dataclass
class Code:
    rich_texts: list[RichText] = field(default_factory=list)
    caption: list[RichText] = field(default_factory=list)
    language: str = "plaintext"


@dataclass
class Equation:
    expression: str = ""


@dataclass
class LinkBlock:
    caption: list[RichText] = field(default_factory=list)
    url: str = ""


@dataclass
class Embed(LinkBlock):
    pass


@dataclass
class Bookmark(LinkBlock):
    pass


@dataclass
class LinkPreview(LinkBlock):
    pass


@dataclass
class TableOfContents:
    color: str = "default"


@dataclass
class LinkToPage:
    type: str = "page_id"
    page_id: str = ""


@dataclass
class Divider:
    pass


# ---------------------------------------------------------------------------
# Block payloads: composites
# ---------------------------------------------------------------------------

@dataclass
class TableCell:
    rich_texts: list[RichText] = field(default_factory=list)


@dataclass
class TableRow:
    id: str
    has_children: bool = False
    cells: list[TableCell] = field(default_factory=list)


@dataclass
class Table:
    """Rows are reproduced as received; their width is not checked
    against ``table_width``.
    """

    table_width: int = 0
    has_column_header: bool = False
    has_row_header: bool = False
    rows: list[TableRow] = field(default_factory=list)


@dataclass
class Column:
    id: str
    has_children: bool = False
    children: list[Block] = field(default_factory=list)


@dataclass
class ColumnList:
    columns: list[Column] = field(default_factory=list)


BlockPayload = Union[
    Paragraph,
    Heading1,
    Heading2,
    Heading3,
    BulletedListItem,
    NumberedListItem,
    ToDo,
    Quote,
    Toggle,
    Callout,
    SyncedBlock,
    Image,
    Video,
    Audio,
    File,
    Code,
    Equation,
    Embed,
    Bookmark,
    LinkPreview,
    Table,
    ColumnList,
    TableOfContents,
    LinkToPage,
    Divider,
]


# ---------------------------------------------------------------------------
# Block
# ---------------------------------------------------------------------------

@dataclass
class Block:
    """One node of the materialized tree.

    Attributes
    ----------
    id:
        Notion block UUID.
    type:
        The block kind; selects the class of ``payload``.
    payload:
        The kind-specific content.
    has_children:
        The descendants flag as reported by Notion.
    last_edited_time:
        Last edit timestamp, ``None`` if Notion sent none or it was
        unparseable.
    """

    id: str
    type: BlockType
    payload: BlockPayload
    has_children: bool = False
    last_edited_time: datetime | None = None

    @property
    def children(self) -> list[Block] | None:
        """Child blocks of text-bearing and synced kinds, else ``None``."""
        return getattr(self.payload, "children", None)


# ---------------------------------------------------------------------------
# Documents (database rows)
# ---------------------------------------------------------------------------

@dataclass
class Tag:
    id: str
    name: str
    color: str = "default"
    description: str = ""


@dataclass
class Document:
    """Flat metadata for one published page in the content database.

    ``pin_order`` is ``None`` for unpinned documents; ``0`` is a real
    pin position.
    """

    page_id: str
    title: str
    slug: str
    date: str = ""
    type: str = "blog"
    show_on_homepage: bool = False
    pin_order: float | None = None
    excerpt: str = ""
    featured_image: str | None = None
    tags: list[Tag] = field(default_factory=list)
    last_edited_time: datetime | None = None
