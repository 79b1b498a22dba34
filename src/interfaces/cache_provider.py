"""Abstract base class for cache service providers.

Defines the contract for the byte-oriented key-value store that backs the
artwork cache.  Implementations may use an in-memory dict or Redis; the
adapter pattern lets the backend be swapped without touching the resolver.

Key naming and serialisation are *not* the provider's concern -- see
:class:`src.services.artwork_cache.ArtworkCache`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.  Implementations raise
    :class:`~src.utils.errors.CacheUnavailableError` when the store cannot
    be reached or a command times out; they never hang indefinitely.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Retrieve the value stored under *key*.

        Parameters
        ----------
        key:
            The cache key to look up.

        Returns
        -------
        bytes or None
            The cached value if present and not expired; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store *value* under *key*, expiring after *ttl* seconds.

        Writing the same value twice is harmless; the second write only
        refreshes the expiry.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key* (no-op if the key does not exist)."""

    @abstractmethod
    async def ping(self) -> bool:
        """Return ``True`` if the store is reachable.  Must not raise."""

    async def close(self) -> None:
        """Release connections held by the provider.  Default is a no-op."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and error messages."""
