"""notiontree.notion_api -- Notion API transport and read-only endpoint wrappers.

* :mod:`.rate_limit` -- Client-side request pacing.
* :mod:`.retries` -- Retry decisions and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth, retries, pacing, pagination.
* :mod:`.blocks` -- Block children listing.
* :mod:`.databases` -- Database queries.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI
from .databases import AsyncDatabaseAPI
from .rate_limit import AsyncRateLimiter
from .retries import RETRYABLE_STATUSES, RetryPolicy
from .transport import AsyncNotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncRateLimiter",
    "RETRYABLE_STATUSES",
    "RetryPolicy",
]
