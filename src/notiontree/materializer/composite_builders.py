"""Builders for kinds with their own internal structure: tables and
column lists.

Both page through the block's children like any container, keep only the
row- or column-shaped items, and (for columns) recurse into each item's
subtree through the :class:`BuildContext`.
"""

from __future__ import annotations

from typing import Any

from notiontree.models import Column, ColumnList, Table, TableCell, TableRow

from .context import BuildContext, block_data
from .rich_text import build_rich_texts


async def build_table(ctx: BuildContext, raw: dict[str, Any]) -> Table:
    """Build a table and all of its rows.

    Cells are copied as received; rows shorter or longer than
    ``table_width`` are not padded or truncated.
    """
    data = block_data(raw)
    rows: list[TableRow] = []

    for item in await ctx.fetch_children(raw.get("id", "")):
        if item.get("type") != "table_row":
            continue
        cells = (item.get("table_row") or {}).get("cells") or []
        rows.append(
            TableRow(
                id=item.get("id", ""),
                has_children=bool(item.get("has_children", False)),
                cells=[TableCell(rich_texts=build_rich_texts(cell)) for cell in cells],
            )
        )

    return Table(
        table_width=data.get("table_width") or 0,
        has_column_header=bool(data.get("has_column_header", False)),
        has_row_header=bool(data.get("has_row_header", False)),
        rows=rows,
    )


async def build_column_list(ctx: BuildContext, raw: dict[str, Any]) -> ColumnList:
    """Build a column list, materializing every column's full subtree.

    Columns may hold any block kind, nested column lists included.
    """
    columns: list[Column] = []

    for item in await ctx.fetch_children(raw.get("id", "")):
        if item.get("type") != "column":
            continue
        column_id = item.get("id", "")
        columns.append(
            Column(
                id=column_id,
                has_children=bool(item.get("has_children", False)),
                children=await ctx.materialize(column_id),
            )
        )

    return ColumnList(columns=columns)
