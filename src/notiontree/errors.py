"""Error hierarchy for notiontree.

Every error class inherits from :class:`NotiontreeError`.  Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).  Subclasses fix their code through the
``default_code`` class attribute.

These errors are raised by the Notion API layer and caught at the core
boundary: a failed container expansion becomes an empty subtree, a failed
listing becomes an empty list.  None of them escape
:class:`~notiontree.async_client.AsyncNotionContentClient`.

Asset downloads never raise; see :class:`~notiontree.assets.fetch.FetchResult`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


class NotiontreeError(Exception):
    """Base exception for all notiontree errors.

    Parameters
    ----------
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    code:
        Overrides the class's ``default_code``.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        *,
        code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message)
        self.code: ErrorCode = code or self.default_code
        self.message = message
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Notion API errors
# ---------------------------------------------------------------------------

class NotiontreeValidationError(NotiontreeError):
    """400 or another non-retryable 4xx.

    Context keys: ``status_code``, ``notion_code``, ``path``, ``body``.
    """


class NotiontreeAuthError(NotiontreeError):
    """401: the integration token is invalid."""

    default_code = ErrorCode.AUTH_ERROR


class NotiontreePermissionError(NotiontreeError):
    """403: the page or database is not shared with the integration."""

    default_code = ErrorCode.PERMISSION_ERROR


class NotiontreeNotFoundError(NotiontreeError):
    """404.  Context keys: ``status_code``, ``notion_code``, ``path``."""

    default_code = ErrorCode.NOT_FOUND


class NotiontreeRetryExhaustedError(NotiontreeError):
    """Every attempt at a retryable request (429 / 5xx) failed.

    Context keys: ``attempts``, ``last_status_code``.
    """

    default_code = ErrorCode.RETRY_EXHAUSTED


class NotiontreeNetworkError(NotiontreeError):
    """Timeout, DNS failure or connection reset that outlived the retries.

    Context keys: ``url``, ``attempt``.
    """

    default_code = ErrorCode.NETWORK_ERROR


# ---------------------------------------------------------------------------
# Local errors
# ---------------------------------------------------------------------------

class NotiontreeConfigError(NotiontreeError):
    """A required setting (token, database id) is empty.

    Context keys: ``missing``.
    """

    default_code = ErrorCode.CONFIG_ERROR
