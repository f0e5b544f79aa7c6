"""Notion blocks -> typed document tree.

Public API:

- :class:`TreeMaterializer` -- recursive-descent fetch and dispatch.
- :data:`DEFAULT_BUILDERS` -- the kind -> builder dispatch table.
- :func:`build_rich_texts` -- rich text normalizer.
"""

from notiontree.materializer.rich_text import build_rich_text, build_rich_texts
from notiontree.materializer.tree import DEFAULT_BUILDERS, TreeMaterializer

__all__ = [
    "DEFAULT_BUILDERS",
    "TreeMaterializer",
    "build_rich_text",
    "build_rich_texts",
]
