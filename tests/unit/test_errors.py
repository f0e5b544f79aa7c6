"""Tests for the NotiontreeError hierarchy."""

from __future__ import annotations

import pytest

from notiontree.errors import (
    ErrorCode,
    NotiontreeAuthError,
    NotiontreeConfigError,
    NotiontreeError,
    NotiontreeNetworkError,
    NotiontreeNotFoundError,
    NotiontreePermissionError,
    NotiontreeRetryExhaustedError,
    NotiontreeValidationError,
)


@pytest.mark.parametrize(
    ("cls", "code"),
    [
        (NotiontreeValidationError, ErrorCode.VALIDATION_ERROR),
        (NotiontreeAuthError, ErrorCode.AUTH_ERROR),
        (NotiontreePermissionError, ErrorCode.PERMISSION_ERROR),
        (NotiontreeNotFoundError, ErrorCode.NOT_FOUND),
        (NotiontreeRetryExhaustedError, ErrorCode.RETRY_EXHAUSTED),
        (NotiontreeNetworkError, ErrorCode.NETWORK_ERROR),
        (NotiontreeConfigError, ErrorCode.CONFIG_ERROR),
    ],
)
def test_codes(cls, code):
    err = cls("boom")
    assert err.code is code
    assert isinstance(err, NotiontreeError)
    assert str(err) == "boom"


def test_context_copied():
    ctx = {"path": "/x"}
    err = NotiontreeNotFoundError("gone", context=ctx)
    ctx["path"] = "/y"
    assert err.context == {"path": "/x"}


def test_cause_chained():
    root = OSError("reset")
    err = NotiontreeNetworkError("down", cause=root)
    assert err.cause is root
    assert err.__cause__ is root


def test_code_override():
    err = NotiontreeError("custom", code=ErrorCode.NETWORK_ERROR)
    assert err.code is ErrorCode.NETWORK_ERROR


def test_repr():
    err = NotiontreeAuthError("bad token", context={"status_code": 401})
    assert repr(err) == (
        "NotiontreeAuthError(code='AUTH_ERROR', message='bad token', "
        "context={'status_code': 401})"
    )
