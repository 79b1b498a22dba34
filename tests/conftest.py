"""Shared pytest fixtures for the Pixum test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.artwork_provider import IArtworkProvider
from src.interfaces.cache_provider import ICacheProvider
from src.models.artwork import ArtworkMetadata
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.artwork_cache import ArtworkCache
from src.utils.errors import CacheUnavailableError, NotFoundError

CACHE_TTL = 3600


def make_artwork(content_id: int = 100, page_count: int = 3) -> ArtworkMetadata:
    """Build an artwork whose page URLs are distinct and predictable."""
    return ArtworkMetadata(
        content_id=content_id,
        title=f"Artwork {content_id}",
        author="pixum-tester",
        author_id=11,
        page_count=page_count,
        pages=[
            f"https://i.pximg.net/img-original/img/2023/01/02/03/04/05/{content_id}_p{index}.png"
            for index in range(page_count)
        ],
        last_modified="2023-01-02T03:04:05+00:00",
    )


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_artwork() -> ArtworkMetadata:
    """Artwork 100 with three pages."""
    return make_artwork()


@pytest.fixture
def artwork_factory():
    """Return :func:`make_artwork` so tests can build other artworks."""
    return make_artwork


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_artwork_provider(sample_artwork: ArtworkMetadata) -> IArtworkProvider:
    """Mock IArtworkProvider that knows artwork 100 only.

    Any other ID raises NotFoundError, as does a page index past the end.
    Add entries to ``mock.known`` to "publish" more artworks mid-test, and
    inspect ``fetch_artwork.await_count`` / ``fetch_page_url.await_count``
    to count upstream calls.
    """
    known = {sample_artwork.content_id: sample_artwork}

    async def fetch_artwork(content_id: int) -> ArtworkMetadata:
        if content_id not in known:
            raise NotFoundError(provider_name="mock-pixiv")
        return known[content_id]

    async def fetch_page_url(content_id: int, page: int) -> str:
        if content_id not in known:
            raise NotFoundError(provider_name="mock-pixiv")
        pages = known[content_id].pages
        if page >= len(pages):
            raise NotFoundError(provider_name="mock-pixiv")
        return pages[page]

    mock = MagicMock(spec=IArtworkProvider)
    mock.get_provider_name.return_value = "mock-pixiv"
    mock.fetch_artwork = AsyncMock(side_effect=fetch_artwork)
    mock.fetch_page_url = AsyncMock(side_effect=fetch_page_url)
    mock.known = known
    return mock


@pytest.fixture
def memory_cache_provider() -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=100, ttl=CACHE_TTL)


@pytest.fixture
def unreachable_cache_provider() -> ICacheProvider:
    """Cache provider whose every command fails as if Redis were down."""
    mock = MagicMock(spec=ICacheProvider)
    mock.get_provider_name.return_value = "unreachable"
    mock.get = AsyncMock(side_effect=CacheUnavailableError(provider_name="unreachable"))
    mock.set = AsyncMock(side_effect=CacheUnavailableError(provider_name="unreachable"))
    mock.delete = AsyncMock(side_effect=CacheUnavailableError(provider_name="unreachable"))
    mock.ping = AsyncMock(return_value=False)
    return mock


@pytest.fixture
def artwork_cache(memory_cache_provider: MemoryCacheProvider) -> ArtworkCache:
    return ArtworkCache(provider=memory_cache_provider, ttl=CACHE_TTL)
