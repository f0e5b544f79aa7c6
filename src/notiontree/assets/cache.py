"""Snapshot cache for Notion-hosted media.

Files uploaded to Notion are served from signed S3 URLs that expire about
an hour after the API hands them out, so a statically built site cannot
link to them.  :class:`AssetSnapshotCache` downloads each such file once
and returns a root-relative path to the local copy instead.

A cached file is named after the MD5 of the URL *path*::

    https://prod-files-secure.s3.us-west-2.amazonaws.com/<ws>/<uuid>/photo.jpg?X-Amz-...
    -> /notion-images/<md5("/<ws>/<uuid>/photo.jpg")>.jpg

The query string (signature, expiry) changes on every API call while the
path does not, so a re-signed URL hits the same file.  Entries are written
once and never updated or evicted; the directory survives across builds.

Two coroutines resolving the same new asset may both download it.  Both
write the same bytes to the same path, so the race is harmless.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from notiontree.config import (
    DEFAULT_ASSET_EXTENSIONS,
    DEFAULT_FALLBACK_EXTENSION,
    NotiontreeConfig,
)
from notiontree.observability import MetricsHook, NoopMetricsHook, get_logger
from notiontree.utils.hashing import url_path_digest

from .fetch import AsyncAssetFetcher, FetchFailure

# Notion's type tag for files it hosts itself.
INTERNAL_KIND = "file"


class AssetSnapshotCache:
    """Resolve media references to stable local paths.

    Parameters
    ----------
    fetcher:
        Performs the downloads.
    asset_dir:
        Where snapshots are written.  Created on first use.
    url_prefix:
        Root-relative URL under which *asset_dir* is served.
    extensions:
        Lowercase extensions kept on snapshot filenames.
    fallback_extension:
        Used when the URL path has none of *extensions*.
    logger, metrics:
        Observability sinks.
    """

    def __init__(
        self,
        fetcher: AsyncAssetFetcher,
        asset_dir: str | Path,
        url_prefix: str = "/notion-images",
        *,
        extensions: list[str] | None = None,
        fallback_extension: str = DEFAULT_FALLBACK_EXTENSION,
        logger: logging.Logger | None = None,
        metrics: MetricsHook | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._asset_dir = Path(asset_dir)
        self._url_prefix = "/" + url_prefix.strip("/")
        self._extensions = frozenset(
            ext.lower() for ext in (DEFAULT_ASSET_EXTENSIONS if extensions is None else extensions)
        )
        self._fallback_extension = fallback_extension
        self._log = logger or get_logger("notiontree.assets")
        self._metrics = metrics if metrics is not None else NoopMetricsHook()
        self._dir_ready = False

    @classmethod
    def from_config(
        cls,
        config: NotiontreeConfig,
        fetcher: AsyncAssetFetcher,
        logger: logging.Logger | None = None,
    ) -> AssetSnapshotCache:
        return cls(
            fetcher,
            config.asset_dir,
            config.asset_url_prefix,
            extensions=config.asset_extensions,
            fallback_extension=config.asset_fallback_extension,
            logger=logger,
            metrics=config.metrics,
        )

    @property
    def asset_dir(self) -> Path:
        return self._asset_dir

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    @staticmethod
    def identity(url: str) -> str:
        """MD5 hex digest of the URL's path component."""
        return url_path_digest(url)

    def filename_for(self, url: str) -> str:
        """Snapshot filename: identity plus an allowed extension."""
        suffix = PurePosixPath(urlsplit(url).path).suffix
        if suffix.lower() not in self._extensions:
            suffix = self._fallback_extension
        return f"{self.identity(url)}{suffix}"

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def resolve(
        self,
        kind: str,
        internal_url: str | None = None,
        external_url: str | None = None,
    ) -> str:
        """Return the URL a renderer should use for a media object.

        Notion-hosted files (``kind == "file"`` with an *internal_url*)
        are snapshotted.  Anything else is returned verbatim without
        network access: *external_url*, else *internal_url*, else ``""``.
        """
        if kind == INTERNAL_KIND and internal_url:
            return await self.snapshot(internal_url)
        return external_url or internal_url or ""

    async def snapshot(self, url: str) -> str:
        """Persist *url* locally and return its stable reference.

        Returns *url* unchanged if the download or the write fails.
        """
        try:
            filename = self.filename_for(url)
        except ValueError as exc:
            return self._fail(url, f"malformed URL: {exc}")
        local_path = self._asset_dir / filename
        public_path = f"{self._url_prefix}/{filename}"

        try:
            self._ensure_dir()
        except OSError as exc:
            return self._fail(url, f"cannot create {self._asset_dir}: {exc}")

        if local_path.exists():
            self._metrics.increment("notiontree.asset_cache_hits_total")
            return public_path

        result = await self._fetcher.fetch(url)
        if not result.ok or result.content is None:
            return self._fail(url, result.error or "empty response", failure=result.failure)

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, local_path.write_bytes, result.content)
        except OSError as exc:
            return self._fail(url, f"cannot write {local_path}: {exc}")

        self._metrics.increment("notiontree.asset_downloads_total")
        self._log.info(
            "Downloaded asset",
            extra={
                "extra_fields": {
                    "op": "snapshot",
                    "filename": filename,
                    "size_kb": round(len(result.content) / 1024),
                }
            },
        )
        return public_path

    def _ensure_dir(self) -> None:
        if not self._dir_ready:
            self._asset_dir.mkdir(parents=True, exist_ok=True)
            self._dir_ready = True

    def _fail(self, url: str, error: str, failure: FetchFailure | None = None) -> str:
        self._metrics.increment("notiontree.asset_failures_total")
        self._log.error(
            "Asset download failed",
            extra={
                "extra_fields": {
                    "op": "snapshot",
                    "url": url.split("?", 1)[0],
                    "failure": failure.value if failure is not None else "io",
                    "error": error,
                }
            },
        )
        return url
