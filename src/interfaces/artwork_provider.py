"""Abstract base class for artwork platform providers.

Defines the contract for looking up artworks on the upstream platform.
Implementations perform network I/O only: no caching and no retries,
both of which belong to :class:`src.services.artwork_resolver.ArtworkResolver`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.artwork import ArtworkMetadata


class IArtworkProvider(ABC):
    """Contract for upstream artwork lookups.

    Callers must pass an already-validated positive ``content_id``.
    Failures are raised as:

    - :class:`~src.utils.errors.NotFoundError` -- the artwork (or page) does not exist
    - :class:`~src.utils.errors.UpstreamUnavailableError` -- network error,
      timeout, or an error status from the platform
    - :class:`~src.utils.errors.UpstreamProtocolError` -- the platform answered
      with a body that could not be parsed
    """

    @abstractmethod
    async def fetch_artwork(self, content_id: int) -> ArtworkMetadata:
        """Return the full metadata record of *content_id*."""

    @abstractmethod
    async def fetch_page_url(self, content_id: int, page: int) -> str:
        """Return the original-resolution image URL of *page* (zero-based).

        Raises ``NotFoundError`` when *page* is beyond the artwork's page count.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and error messages."""
