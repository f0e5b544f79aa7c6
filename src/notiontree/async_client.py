"""Asynchronous client for building a site from a Notion database.

:class:`AsyncNotionContentClient` is the surface a site generator talks
to.  None of its operations raise for remote or configuration problems:
failures are logged and collapse to an empty list or ``None``.

Usage::

    import asyncio
    from notiontree import AsyncNotionContentClient

    async def main():
        async with AsyncNotionContentClient.from_env() as client:
            for doc in await client.list_documents():
                blocks = await client.materialize_content(doc.page_id)
                print(doc.slug, len(blocks))

    asyncio.run(main())
"""

from __future__ import annotations

import logging
from typing import Any

from notiontree.assets import AssetSnapshotCache, AsyncAssetFetcher
from notiontree.config import NotiontreeConfig
from notiontree.documents import (
    DATE_DESCENDING,
    PUBLISHED_FILTER,
    build_document,
    featured_image_source,
    slug_filter,
)
from notiontree.errors import NotiontreeConfigError, NotiontreeError
from notiontree.materializer import TreeMaterializer
from notiontree.models import Block, Document
from notiontree.notion_api.blocks import AsyncBlockAPI
from notiontree.notion_api.databases import AsyncDatabaseAPI
from notiontree.notion_api.transport import AsyncNotionTransport
from notiontree.observability import get_logger


class AsyncNotionContentClient:
    """Read documents and their content trees from Notion.

    Parameters
    ----------
    token:
        Notion integration token.  Ignored when *config* is given.
    config:
        A complete :class:`NotiontreeConfig`.
    logger:
        Destination for failure logs.  Defaults to ``notiontree.client``.
    **kwargs:
        Forwarded to :class:`NotiontreeConfig` when *config* is not given.
    """

    def __init__(
        self,
        token: str = "",
        *,
        config: NotiontreeConfig | None = None,
        logger: logging.Logger | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = config or NotiontreeConfig(token=token, **kwargs)
        self._log = logger or get_logger("notiontree.client")
        self._transport = AsyncNotionTransport(self._config)
        self._blocks = AsyncBlockAPI(self._transport)
        self._databases = AsyncDatabaseAPI(self._transport)
        self._fetcher = AsyncAssetFetcher(self._config)
        self._assets = AssetSnapshotCache.from_config(self._config, self._fetcher)
        self._materializer = TreeMaterializer(
            self._blocks, self._assets, metrics=self._config.metrics,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> AsyncNotionContentClient:
        """Client configured from ``NOTION_API_SECRET`` / ``DATABASE_ID``."""
        return cls(config=NotiontreeConfig.from_env(**overrides))

    @property
    def config(self) -> NotiontreeConfig:
        return self._config

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def list_documents(self) -> list[Document]:
        """All published documents, newest ``Date`` first.

        Rows without a title or slug are skipped.  Returns ``[]`` when the
        token or database id is missing or the query fails.
        """
        try:
            self._require("token", "database_id")
            pages = await self._databases.query(
                self._config.database_id,
                filter=PUBLISHED_FILTER,
                sorts=DATE_DESCENDING,
            )
        except NotiontreeError as exc:
            self._report(exc, "list_documents")
            return []

        documents: list[Document] = []
        for page in pages:
            document = await self._build_document(page)
            if document is not None:
                documents.append(document)
        return documents

    async def get_document_by_slug(self, slug: str) -> Document | None:
        """The published document whose slug is *slug*, or ``None``."""
        try:
            self._require("token", "database_id")
            pages = await self._databases.query(
                self._config.database_id, filter=slug_filter(slug), limit=1,
            )
        except NotiontreeError as exc:
            self._report(exc, "get_document_by_slug", slug=slug)
            return None

        if not pages:
            return None
        return await self._build_document(pages[0])

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    async def materialize_content(self, page_id: str) -> list[Block]:
        """The full typed block tree of page *page_id*.

        Subtrees that could not be fetched are empty; ``[]`` when no token
        is configured.
        """
        try:
            self._require("token")
        except NotiontreeConfigError as exc:
            self._report(exc, "materialize_content", page_id=page_id)
            return []
        return await self._materializer.materialize(page_id)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the API transport and the asset downloader."""
        await self._transport.close()
        await self._fetcher.close()

    async def __aenter__(self) -> AsyncNotionContentClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _build_document(self, page: dict[str, Any]) -> Document | None:
        document = build_document(page)
        if document is None or not self._config.snapshot_featured_images:
            return document
        source = featured_image_source(page)
        if source is not None:
            kind, url = source
            document.featured_image = await self._assets.resolve(
                kind,
                internal_url=url if kind == "file" else None,
                external_url=url if kind == "external" else None,
            )
        return document

    def _require(self, *names: str) -> None:
        missing = [name for name in names if not getattr(self._config, name)]
        if missing:
            raise NotiontreeConfigError(
                message=f"Missing configuration: {', '.join(missing)}",
                context={"missing": missing},
            )

    def _report(self, exc: NotiontreeError, op: str, **fields: Any) -> None:
        # Missing configuration is expected in preview builds; warn only.
        level = logging.WARNING if isinstance(exc, NotiontreeConfigError) else logging.ERROR
        self._log.log(
            level,
            f"{op} failed; returning empty result",
            extra={
                "extra_fields": {
                    "op": op,
                    "error_code": exc.code,
                    "error": exc.message,
                    **fields,
                }
            },
        )
