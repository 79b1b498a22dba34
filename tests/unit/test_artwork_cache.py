"""Unit tests for cache key construction and the typed ArtworkCache."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.cache_provider import ICacheProvider
from src.models.artwork import ArtworkMetadata
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.artwork_cache import ArtworkCache, artwork_cache_key, page_cache_key
from src.utils.errors import CacheUnavailableError


class TestCacheKeys:
    def test_page_key_is_deterministic(self) -> None:
        assert page_cache_key(12345, 0) == page_cache_key(12345, 0)

    def test_metadata_key_differs_from_page_key(self) -> None:
        assert artwork_cache_key(12345) != page_cache_key(12345, 0)

    def test_distinct_inputs_do_not_collide(self) -> None:
        keys = {
            page_cache_key(1, 23),
            page_cache_key(12, 3),
            page_cache_key(123, 0),
            artwork_cache_key(123),
            artwork_cache_key(1),
        }
        assert len(keys) == 5

    def test_prefix_namespaces_keys(self) -> None:
        assert page_cache_key(7, 1) == "pixum:page:7:1"
        assert artwork_cache_key(7, prefix="staging") == "staging:artwork:7"


class TestArtworkCache:
    @pytest.mark.asyncio
    async def test_page_url_round_trip(self, artwork_cache: ArtworkCache) -> None:
        url = "https://i.pximg.net/img-original/img/x_p0.png"
        assert await artwork_cache.get_page_url(100, 0) is None
        await artwork_cache.set_page_url(100, 0, url)
        assert await artwork_cache.get_page_url(100, 0) == url
        assert await artwork_cache.get_page_url(100, 1) is None

    @pytest.mark.asyncio
    async def test_artwork_round_trip(
        self, artwork_cache: ArtworkCache, sample_artwork: ArtworkMetadata
    ) -> None:
        await artwork_cache.set_artwork(sample_artwork)
        assert await artwork_cache.get_artwork(100) == sample_artwork

    @pytest.mark.asyncio
    async def test_writing_twice_leaves_value_unchanged(
        self,
        artwork_cache: ArtworkCache,
        memory_cache_provider: MemoryCacheProvider,
        sample_artwork: ArtworkMetadata,
    ) -> None:
        await artwork_cache.set_artwork(sample_artwork)
        first = await memory_cache_provider.get(artwork_cache.artwork_key(100))
        await artwork_cache.set_artwork(sample_artwork)
        second = await memory_cache_provider.get(artwork_cache.artwork_key(100))
        assert first == second

    @pytest.mark.asyncio
    async def test_writes_use_configured_ttl(self, sample_artwork: ArtworkMetadata) -> None:
        provider = MagicMock(spec=ICacheProvider)
        provider.set = AsyncMock()
        cache = ArtworkCache(provider=provider, ttl=10800, key_prefix="p")

        await cache.set_artwork(sample_artwork)
        await cache.set_page_url(100, 2, sample_artwork.pages[2])

        assert [call.args[2] for call in provider.set.await_args_list] == [10800, 10800]
        assert provider.set.await_args_list[1].args[:2] == (
            "p:page:100:2",
            sample_artwork.pages[2].encode("utf-8"),
        )

    @pytest.mark.asyncio
    async def test_corrupt_artwork_entry_is_a_miss_and_evicted(
        self, artwork_cache: ArtworkCache, memory_cache_provider: MemoryCacheProvider
    ) -> None:
        key = artwork_cache.artwork_key(100)
        await memory_cache_provider.set(key, b"{not json", 3600)

        assert await artwork_cache.get_artwork(100) is None
        assert await memory_cache_provider.get(key) is None

    @pytest.mark.asyncio
    async def test_artwork_entry_for_other_id_is_a_miss(
        self,
        artwork_cache: ArtworkCache,
        memory_cache_provider: MemoryCacheProvider,
        artwork_factory,
    ) -> None:
        other = artwork_factory(content_id=200, page_count=1)
        await memory_cache_provider.set(
            artwork_cache.artwork_key(100), other.model_dump_json(by_alias=True).encode(), 3600
        )
        assert await artwork_cache.get_artwork(100) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b"\xff\xfe\x00", b"not-a-url"])
    async def test_corrupt_page_entry_is_a_miss(
        self,
        artwork_cache: ArtworkCache,
        memory_cache_provider: MemoryCacheProvider,
        raw: bytes,
    ) -> None:
        await memory_cache_provider.set(artwork_cache.page_key(100, 0), raw, 3600)
        assert await artwork_cache.get_page_url(100, 0) is None

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, unreachable_cache_provider) -> None:
        cache = ArtworkCache(provider=unreachable_cache_provider, ttl=60)
        with pytest.raises(CacheUnavailableError):
            await cache.get_page_url(100, 0)
