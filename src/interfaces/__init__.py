"""Public interface definitions for Pixum's external services.

Every external dependency -- the artwork platform and the cache store -- is
accessed through the abstract base classes defined here.  Concrete adapters
live in ``src/providers/`` and are wired together in ``src/main.py``.

    Interface          →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IArtworkProvider   →  PixivArtworkProvider
    ICacheProvider     →  RedisCacheProvider, MemoryCacheProvider

Unit tests inject ``MagicMock(spec=...)`` fakes of these interfaces instead
of talking to Pixiv or Redis.
"""

from src.interfaces.artwork_provider import IArtworkProvider
from src.interfaces.cache_provider import ICacheProvider

__all__ = [
    "IArtworkProvider",
    "ICacheProvider",
]
