"""Block API wrapper for the Notion API.

Only the read side is needed: :class:`AsyncBlockAPI` lists a container's
direct children, walking every page of the cursor pagination.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from .transport import AsyncNotionTransport


class AsyncBlockAPI:
    """Asynchronous wrapper for ``/blocks/{id}/children``.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    def iter_children(self, block_id: str) -> AsyncIterator[dict[str, Any]]:
        """Yield the raw child block objects of *block_id* in order.

        Errors from any page propagate out of the iterator.
        """
        return self._transport.paginate(f"/blocks/{block_id}/children", method="GET")

    async def list_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve all children of a block or page, auto-paginating.

        Parameters
        ----------
        block_id:
            The UUID of the parent block (or page).

        Returns
        -------
        list[dict]
            All child block objects in source order.
        """
        return [item async for item in self.iter_children(block_id)]
