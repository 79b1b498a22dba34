"""In-memory cache provider using cachetools.TTLCache.

Simple, fast cache suitable for development and single-process deployments
(``CACHE_BACKEND=memory``).  Not shared across workers; use
:class:`RedisCacheProvider` for anything behind more than one process.
"""

from __future__ import annotations

import structlog
from cachetools import TTLCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds applied to every entry.
    """

    def __init__(self, max_size: int = 1000, ttl: int = 3600) -> None:
        self._default_ttl = ttl
        self._cache: TTLCache[str, bytes] = TTLCache(maxsize=max_size, ttl=ttl)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> bytes | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return value

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store *value* under *key*.

        ``TTLCache`` applies the uniform TTL given at construction time; a
        different per-call *ttl* is logged and otherwise ignored.
        """
        if ttl != self._default_ttl:
            logger.debug("cache_ttl_ignored", key=key, ttl=ttl, effective_ttl=self._default_ttl)
        self._cache[key] = value
        logger.debug("cache_set", key=key)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def ping(self) -> bool:
        return True

    def get_provider_name(self) -> str:
        return "memory"
