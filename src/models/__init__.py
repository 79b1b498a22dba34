"""Pixum domain models -- re-exports all public model classes.

    - artwork.py    -- ArtworkMetadata, the resolved record of one Pixiv artwork
    - resolution.py -- tagged result handed from the resolver to the handlers
"""

from __future__ import annotations

from src.models.artwork import ArtworkMetadata
from src.models.resolution import ErrorResult, MetadataResult, Redirect, Resolution

__all__ = [
    "ArtworkMetadata",
    "ErrorResult",
    "MetadataResult",
    "Redirect",
    "Resolution",
]
