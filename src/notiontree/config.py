"""Configuration for notiontree.

:class:`NotiontreeConfig` is a plain dataclass that captures every tuneable
knob used by the transport, the tree materializer, and the asset snapshot
cache.  Instances are passed to :class:`AsyncNotionContentClient`.

Two module-level constants define the asset file-naming defaults:

* :data:`DEFAULT_ASSET_EXTENSIONS`: extensions kept when snapshotting.
* :data:`DEFAULT_FALLBACK_EXTENSION`: used for anything else.
"""

from __future__ import annotations

import dataclasses
import operator
import os
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from notiontree.observability import MetricsHook

# ---------------------------------------------------------------------------
# Asset naming constants
# ---------------------------------------------------------------------------

DEFAULT_ASSET_EXTENSIONS: list[str] = [
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".webp",
    ".svg",
    ".avif",
]
"""Extensions (lowercase) preserved on snapshotted asset filenames."""

DEFAULT_FALLBACK_EXTENSION: str = ".png"
"""Extension used when the URL path carries none of the allowed ones."""

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})

# (field, comparison, bound, wording) for numeric knobs.
_BOUNDS: tuple[tuple[str, Any, float, str], ...] = (
    ("retry_max_attempts", operator.ge, 1, ">= 1"),
    ("retry_base_delay", operator.ge, 0, ">= 0"),
    ("retry_max_delay", operator.ge, 0, ">= 0"),
    ("rate_limit_rps", operator.gt, 0, "> 0"),
    ("timeout_seconds", operator.gt, 0, "> 0"),
)


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class NotiontreeConfig:
    """Complete configuration for a notiontree client.

    Every parameter has a default.  A config without ``token`` is valid but
    every remote operation on a client built from it degrades to an empty
    result.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    database_id:
        The Notion database holding document rows.  Needed by
        ``list_documents`` and ``get_document_by_slug`` only.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    retry_max_attempts:
        Maximum number of attempts per request for retryable HTTP errors.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Randomly scale backoff intervals to 50-100 % of their value.
    rate_limit_rps:
        Target requests per second for client-side pacing.
    timeout_seconds:
        HTTP request timeout in seconds, for API calls and asset downloads.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    asset_dir:
        Directory that persisted asset snapshots are written to.  Created
        on first use.
    asset_url_prefix:
        Root-relative URL prefix under which *asset_dir* is served.
    asset_extensions:
        Lowercase extensions kept on snapshot filenames.
    asset_fallback_extension:
        Extension for snapshots whose path has no allowed extension.
    snapshot_featured_images:
        Route Notion-hosted ``Featured Image`` files of listed documents
        through the asset cache.
    metrics:
        Optional :class:`~notiontree.observability.MetricsHook` backend.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    database_id: str = ""

    notion_version: str = "2022-06-28"

    base_url: str = "https://api.notion.com/v1"

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Assets ──────────────────────────────────────────────────────────
    asset_dir: str = "dist/notion-images"

    asset_url_prefix: str = "/notion-images"

    asset_extensions: list[str] = field(
        default_factory=lambda: list(DEFAULT_ASSET_EXTENSIONS),
    )

    asset_fallback_extension: str = DEFAULT_FALLBACK_EXTENSION

    snapshot_featured_images: bool = True

    # ── Observability ──────────────────────────────────────────────────
    metrics: MetricsHook | None = None

    def __post_init__(self) -> None:
        scheme_host = urlparse(self.base_url)
        if scheme_host.scheme == "http" and scheme_host.hostname not in _LOCAL_HOSTS:
            raise ValueError(
                f"base_url {self.base_url!r} is plain HTTP on a non-local host; "
                "the token would travel unencrypted (insecure HTTP)"
            )

        for name, compare, bound, wording in _BOUNDS:
            value = getattr(self, name)
            if not compare(value, bound):
                raise ValueError(f"{name} must be {wording}, got {value!r}")

        if not self.asset_fallback_extension.startswith("."):
            raise ValueError(
                "asset_fallback_extension must start with '.', "
                f"got {self.asset_fallback_extension!r}"
            )

        self.asset_url_prefix = "/" + self.asset_url_prefix.strip("/")
        self.asset_extensions = [ext.lower() for ext in self.asset_extensions]

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides: Any) -> NotiontreeConfig:
        """Build a config from environment variables.

        Reads ``NOTION_API_SECRET``, ``DATABASE_ID`` and, when set,
        ``NOTIONTREE_ASSET_DIR``.  Missing variables leave the field at its
        default; keyword *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            "token": env.get("NOTION_API_SECRET", ""),
            "database_id": env.get("DATABASE_ID", ""),
        }
        asset_dir = env.get("NOTIONTREE_ASSET_DIR")
        if asset_dir:
            values["asset_dir"] = asset_dir
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        # Only the last four characters of the token are ever shown.
        shown = []
        for item in dataclasses.fields(self):
            value = getattr(self, item.name)
            if item.name == "token":
                value = f"...{value[-4:]}" if len(value) >= 4 else "****"
            shown.append(f"{item.name}={value!r}")
        return f"{type(self).__name__}({', '.join(shown)})"
