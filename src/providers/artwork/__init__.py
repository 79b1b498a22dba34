"""Artwork platform providers."""

from src.providers.artwork.pixiv_provider import PixivArtworkProvider

__all__ = ["PixivArtworkProvider"]
