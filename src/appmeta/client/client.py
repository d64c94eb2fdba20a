"""AppMeta Python SDK — Async and sync clients for the AppMeta REST API.

Usage::

    # Async
    async with AsyncAppMetaClient("http://localhost:8080") as client:
        await client.add_metadata(document)
        results = await client.lookup(title="app title", company="smallcorp")

    # Sync (wraps async client internally)
    client = AppMetaClient("http://localhost:8080")
    results = client.search("description", "quick fox")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from typing import Any, TypeVar, cast

import httpx
import yaml

from appmeta.models.metadata import Metadata

_T = TypeVar("_T")

logger = logging.getLogger(__name__)

MetadataResult = dict[str, Any]
"""A metadata document as returned by the API (mirrors ``Metadata`` JSON)."""

Document = Metadata | Mapping[str, Any] | str
"""Anything ``add_metadata`` can submit: a model, a plain mapping, or raw YAML."""


def _to_yaml(document: Document) -> str:
    if isinstance(document, str):
        return document
    if isinstance(document, Metadata):
        data = document.model_dump(mode="json")
    else:
        data = dict(document)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncAppMetaClient:
    """Async Python client for the AppMeta API.

    Args:
        base_url: AppMeta server URL, e.g. ``"http://localhost:8080"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.

    Example::

        async with AsyncAppMetaClient("http://localhost:8080") as client:
            for doc in await client.search("license", "apache"):
                print(doc["title"], doc["version"])
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncAppMetaClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def health(self) -> dict[str, Any]:
        """Check server health."""
        resp = await self._client.get("/v1/health")
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def add_metadata(self, document: Document) -> dict[str, Any]:
        """Submit a metadata document for validation and indexing.

        Args:
            document: A ``Metadata`` model, a mapping of its fields, or a raw
                YAML string.

        Returns:
            Index response dict with ``status``, ``title``, ``version`` and
            ``total_documents``.

        Raises:
            httpx.HTTPStatusError: If the server rejects the document.
        """
        resp = await self._client.post(
            "/v1/metadata",
            content=_to_yaml(document).encode("utf-8"),
            headers={"Content-Type": "application/x-yaml"},
        )
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def lookup(self, terms: Mapping[str, str] | None = None, **extra_terms: str) -> list[MetadataResult]:
        """Find documents matching every ``attribute=phrase`` pair.

        Args:
            terms: Attribute to search phrase mapping.
            **extra_terms: More attribute filters, merged over ``terms``.

        Returns:
            Matching documents.
        """
        params = {**(terms or {}), **extra_terms}
        resp = await self._client.get("/v1/metadata", params=params)
        resp.raise_for_status()
        return cast(list[MetadataResult], resp.json())

    async def search(self, attribute: str, query: str) -> list[MetadataResult]:
        """Find documents whose ``attribute`` contains every keyword of ``query``."""
        resp = await self._client.get(f"/v1/search/{attribute}", params={"q": query})
        resp.raise_for_status()
        return cast(list[MetadataResult], resp.json())


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client
# ═══════════════════════════════════════════════════════════════════════════════


class AppMetaClient:
    """Synchronous wrapper around :class:`AsyncAppMetaClient`.

    Each call opens a short-lived async client and runs it to completion.

    Args:
        base_url: AppMeta server URL.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter); run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncAppMetaClient:
        return AsyncAppMetaClient(
            self._base_url,
            timeout=self._timeout,
            **self._httpx_kwargs,
        )

    def health(self) -> dict[str, Any]:
        """Check server health."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.health()

        return self._run(_call())

    def add_metadata(self, document: Document) -> dict[str, Any]:
        """Submit a metadata document for validation and indexing."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.add_metadata(document)

        return self._run(_call())

    def lookup(self, terms: Mapping[str, str] | None = None, **extra_terms: str) -> list[MetadataResult]:
        """Find documents matching every ``attribute=phrase`` pair."""

        async def _call() -> list[MetadataResult]:
            async with self._make_client() as c:
                return await c.lookup(terms, **extra_terms)

        return self._run(_call())

    def search(self, attribute: str, query: str) -> list[MetadataResult]:
        """Find documents whose ``attribute`` contains every keyword of ``query``."""

        async def _call() -> list[MetadataResult]:
            async with self._make_client() as c:
                return await c.search(attribute, query)

        return self._run(_call())
