"""Database query wrapper for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncDatabaseAPI:
    """Asynchronous wrapper for ``POST /databases/{id}/query``.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return the page objects matching *filter*, in *sorts* order.

        Parameters
        ----------
        database_id:
            The UUID of the database.
        filter:
            A Notion filter object, e.g.
            ``{"property": "Published", "checkbox": {"equals": True}}``.
        sorts:
            A list of Notion sort objects.
        limit:
            Stop after this many rows.  ``None`` walks every page.
        """
        body: dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter
        if sorts is not None:
            body["sorts"] = sorts

        rows: list[dict[str, Any]] = []
        async for row in self._transport.paginate(
            f"/databases/{database_id}/query", method="POST", json=body,
        ):
            rows.append(row)
            if limit is not None and len(rows) >= limit:
                break
        return rows
