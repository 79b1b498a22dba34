"""Typed cache adapter for resolved artwork data.

Wraps a byte-oriented :class:`ICacheProvider` and owns the two concerns the
resolver should not care about: key naming and serialisation.

Key layout (``prefix`` defaults to ``pixum``)::

    {prefix}:page:{content_id}:{page}   -> UTF-8 image URL
    {prefix}:artwork:{content_id}       -> ArtworkMetadata as camelCase JSON

Keys are pure functions of their arguments, and the ``page`` / ``artwork``
segment keeps the two entity kinds from ever colliding.  Every write uses
the single configured TTL.

Provider failures are raised as ``CacheUnavailableError`` for the resolver
to absorb.  An entry that cannot be decoded is logged, evicted and reported
as a miss, so a corrupted value never breaks a request.
"""

from __future__ import annotations

from pydantic import ValidationError

from src.interfaces.cache_provider import ICacheProvider
from src.models.artwork import ArtworkMetadata
from src.utils.logging import get_logger

DEFAULT_KEY_PREFIX = "pixum"


def page_cache_key(content_id: int, page: int, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Return the cache key of a single resolved page URL."""
    return f"{prefix}:page:{content_id}:{page}"


def artwork_cache_key(content_id: int, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Return the cache key of an artwork's full metadata record."""
    return f"{prefix}:artwork:{content_id}"


class ArtworkCache:
    """Reads and writes page URLs and artwork metadata through a cache provider."""

    def __init__(
        self,
        provider: ICacheProvider,
        ttl: int,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._provider = provider
        self._ttl = ttl
        self._prefix = key_prefix
        self._logger = get_logger(__name__)

    def page_key(self, content_id: int, page: int) -> str:
        return page_cache_key(content_id, page, self._prefix)

    def artwork_key(self, content_id: int) -> str:
        return artwork_cache_key(content_id, self._prefix)

    # -- Page URLs -----------------------------------------------------------

    async def get_page_url(self, content_id: int, page: int) -> str | None:
        key = self.page_key(content_id, page)
        raw = await self._provider.get(key)
        if raw is None:
            return None
        try:
            url = raw.decode("utf-8")
        except (AttributeError, UnicodeDecodeError) as exc:
            await self._evict(key, str(exc))
            return None
        if not url.startswith(("https://", "http://")):
            await self._evict(key, "not a URL")
            return None
        return url

    async def set_page_url(self, content_id: int, page: int, url: str) -> None:
        await self._provider.set(self.page_key(content_id, page), url.encode("utf-8"), self._ttl)

    # -- Artwork metadata ----------------------------------------------------

    async def get_artwork(self, content_id: int) -> ArtworkMetadata | None:
        key = self.artwork_key(content_id)
        raw = await self._provider.get(key)
        if raw is None:
            return None
        try:
            artwork = ArtworkMetadata.model_validate_json(raw)
        except ValidationError as exc:
            await self._evict(key, str(exc))
            return None
        if artwork.content_id != content_id:
            await self._evict(key, f"holds artwork {artwork.content_id}")
            return None
        return artwork

    async def set_artwork(self, artwork: ArtworkMetadata) -> None:
        payload = artwork.model_dump_json(by_alias=True).encode("utf-8")
        await self._provider.set(self.artwork_key(artwork.content_id), payload, self._ttl)

    async def _evict(self, key: str, reason: str) -> None:
        self._logger.warning("cache_entry_corrupt", key=key, error=reason)
        await self._provider.delete(key)
