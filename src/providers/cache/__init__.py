"""Cache providers.

RedisCacheProvider is the production backend: the cache lives in a
separate Redis service so every worker shares it.  MemoryCacheProvider is
a process-local TTL dict for development and for running without Redis.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider

__all__ = ["MemoryCacheProvider", "RedisCacheProvider"]
