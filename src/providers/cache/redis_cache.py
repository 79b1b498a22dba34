"""Redis cache provider implementing ICacheProvider.

Talks to a Redis-compatible server through ``redis.asyncio`` with a shared
connection pool, so concurrent requests reuse connections instead of
opening one each.  Every command is bounded by ``socket_timeout``; a
timeout or connection failure is raised as
:class:`~src.utils.errors.CacheUnavailableError` and the resolver treats
it as a cache miss.
"""

from __future__ import annotations

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.utils.errors import CacheUnavailableError
from src.utils.logging import get_logger


class RedisCacheProvider(ICacheProvider):
    """Byte-oriented cache over ``GET`` / ``SET key value EX ttl`` / ``DEL``.

    The ``Redis`` client is injectable for testability; when omitted, one
    is built from *settings* over a ``ConnectionPool``.
    """

    def __init__(self, settings: Settings, client: Redis | None = None) -> None:
        self._logger = get_logger(__name__)
        self._url = settings.redis_url
        if client is None:
            pool = ConnectionPool(
                host=settings.redis_host,
                port=settings.redis_port,
                db=settings.redis_db,
                password=settings.redis_password or None,
                max_connections=settings.redis_max_connections,
                socket_timeout=settings.cache_timeout,
                socket_connect_timeout=settings.cache_timeout,
            )
            # from_pool hands ownership of the pool to the client, so aclose() releases it.
            client = Redis.from_pool(pool)
        self._client = client

    async def get(self, key: str) -> bytes | None:
        try:
            value = await self._client.get(key)
        except RedisError as exc:
            raise CacheUnavailableError(
                message=f"GET {key} failed: {exc}", provider_name="redis"
            ) from exc
        self._logger.debug("cache_hit" if value is not None else "cache_miss", key=key)
        return value

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl)
        except RedisError as exc:
            raise CacheUnavailableError(
                message=f"SET {key} failed: {exc}", provider_name="redis"
            ) from exc
        self._logger.debug("cache_set", key=key, ttl=ttl)

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            raise CacheUnavailableError(
                message=f"DEL {key} failed: {exc}", provider_name="redis"
            ) from exc

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as exc:
            self._logger.warning("cache_ping_failed", url=self._url, error=str(exc))
            return False

    async def close(self) -> None:
        await self._client.aclose()

    def get_provider_name(self) -> str:
        return "redis"
