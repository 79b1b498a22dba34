"""Cache-aside resolver for Pixiv artworks.

Both public operations follow the same steps:

1. Validate the content ID (and page).  Invalid input raises
   ``InvalidInputError`` before any cache or network call.
2. Read the cache.  A hit is returned as-is.
3. On a miss, ask the artwork provider, write the result back with the
   configured TTL, and return it.

Cache failures never fail a request: ``CacheUnavailableError`` on read is a
miss, on write it is logged and the fetched value is still returned.
Upstream failures propagate unchanged so the HTTP layer can tell
"does not exist" (``NotFoundError``, never cached) from "try again"
(``UpstreamUnavailableError``).

There is no in-process locking: concurrent misses for the same
key each call Pixiv and each write the same value, which is harmless.

Retries of ``UpstreamUnavailableError`` are off by default and bounded by
``max_retries`` when enabled.  ``NotFoundError`` and
``UpstreamProtocolError`` are never retried.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

from src.interfaces.artwork_provider import IArtworkProvider
from src.models.artwork import ArtworkMetadata
from src.models.resolution import ErrorResult, MetadataResult, Redirect, Resolution
from src.services.artwork_cache import ArtworkCache
from src.utils.errors import CacheUnavailableError, PixumError, UpstreamUnavailableError
from src.utils.identifiers import parse_content_id, parse_page_number
from src.utils.logging import get_logger

_T = TypeVar("_T")


class ArtworkResolver:
    """Resolves artwork IDs to image URLs or metadata through the cache.

    Parameters
    ----------
    provider:
        Upstream artwork provider (Pixiv in production).
    cache:
        Typed cache adapter; owns keys, serialisation and TTL.
    max_retries:
        Extra attempts after an ``UpstreamUnavailableError``.  ``0`` disables
        retrying.
    retry_backoff:
        Base delay in seconds, doubled after each failed attempt.
    """

    def __init__(
        self,
        provider: IArtworkProvider,
        cache: ArtworkCache,
        *,
        max_retries: int = 0,
        retry_backoff: float = 0.5,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def resolve_page(self, content_id: int | str, page: int | str | None = 0) -> str:
        """Return the image URL of *page* (zero-based) of artwork *content_id*."""
        cid = parse_content_id(content_id)
        page_no = parse_page_number(page)

        cached = await self._read_cache(self._cache.get_page_url, cid, page_no)
        if cached is not None:
            self._logger.debug("resolve_cache_hit", content_id=cid, page=page_no)
            return cached

        self._logger.debug("resolve_cache_miss", content_id=cid, page=page_no)
        url = await self._call_upstream(self._provider.fetch_page_url, cid, page_no)
        await self._write_cache(self._cache.set_page_url, cid, page_no, url)
        return url

    async def resolve_metadata(self, content_id: int | str) -> ArtworkMetadata:
        """Return the full metadata record of artwork *content_id*."""
        cid = parse_content_id(content_id)

        cached = await self._read_cache(self._cache.get_artwork, cid)
        if cached is not None:
            self._logger.debug("resolve_cache_hit", content_id=cid)
            return cached

        self._logger.debug("resolve_cache_miss", content_id=cid)
        artwork = await self._call_upstream(self._provider.fetch_artwork, cid)
        await self._write_cache(self._cache.set_artwork, artwork)
        return artwork

    async def resolve_page_result(
        self, content_id: int | str, page: int | str | None = 0
    ) -> Resolution:
        """Like :meth:`resolve_page`, but returns a ``Redirect`` or ``ErrorResult``."""
        try:
            url = await self.resolve_page(content_id, page)
        except PixumError as exc:
            return _error_result(exc)
        return Redirect(url=url)

    async def resolve_metadata_result(self, content_id: int | str) -> Resolution:
        """Like :meth:`resolve_metadata`, but returns a ``MetadataResult`` or ``ErrorResult``."""
        try:
            artwork = await self.resolve_metadata(content_id)
        except PixumError as exc:
            return _error_result(exc)
        return MetadataResult(artwork=artwork)

    # ------------------------------------------------------------------
    # Cache access -- failures are downgraded, never raised
    # ------------------------------------------------------------------

    async def _read_cache(self, reader: Callable[..., Awaitable[_T | None]], *args: Any) -> _T | None:
        try:
            return await reader(*args)
        except CacheUnavailableError as exc:
            self._logger.warning("cache_unavailable", operation="get", args=args, error=str(exc))
            return None

    async def _write_cache(self, writer: Callable[..., Awaitable[None]], *args: Any) -> None:
        try:
            await writer(*args)
        except CacheUnavailableError as exc:
            self._logger.warning("cache_unavailable", operation="set", error=str(exc))

    # ------------------------------------------------------------------
    # Upstream access
    # ------------------------------------------------------------------

    async def _call_upstream(self, fetch: Callable[..., Awaitable[_T]], *args: Any) -> _T:
        attempt = 0
        while True:
            try:
                return await fetch(*args)
            except UpstreamUnavailableError as exc:
                if attempt >= self._max_retries:
                    raise
                delay = self._retry_backoff * (2**attempt)
                attempt += 1
                self._logger.warning(
                    "upstream_retry",
                    attempt=attempt,
                    max_retries=self._max_retries,
                    delay=delay,
                    error=str(exc),
                )
                await asyncio.sleep(delay)


def _error_result(exc: PixumError) -> ErrorResult:
    return ErrorResult(error_kind=exc.kind, error_name=type(exc).__name__, message=exc.message)
