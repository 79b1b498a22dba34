"""Pixum FastAPI application entry point.

Wires the Pixiv provider, the cache provider and the resolver together,
stores them on ``app.state`` for the routes, and installs the middleware
stack.  Configuration comes from ``.env`` / environment variables
(``Settings``) merged over ``config/config.yaml`` (``load_config``).

Run locally with ``python -m src.main`` or ``uvicorn src.main:app``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from src.api.middleware import (
    ConcurrencyLimitMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    http_exception_handler,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.providers.artwork.pixiv_provider import PixivArtworkProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider
from src.services.artwork_cache import ArtworkCache
from src.services.artwork_resolver import ArtworkResolver
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component factories
# ---------------------------------------------------------------------------


def _build_http_client(app_settings: Settings) -> httpx.AsyncClient:
    """Build the shared client used for every Pixiv request.

    Pixiv's AJAX endpoints answer 403 to non-browser user agents and expect
    a pixiv Referer; ``Accept-Language`` pins titles to the English UI.
    """
    headers = {
        "User-Agent": app_settings.upstream_user_agent,
        "Accept-Language": app_settings.upstream_accept_language,
        "Referer": app_settings.upstream_referer,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        headers=headers,
        timeout=httpx.Timeout(app_settings.upstream_timeout),
        follow_redirects=False,
    )


def _build_cache_provider(app_settings: Settings) -> ICacheProvider:
    """Select the cache backend named by ``CACHE_BACKEND``."""
    backend = app_settings.cache_backend.lower()
    if backend == "redis":
        return RedisCacheProvider(settings=app_settings)
    if backend == "memory":
        return MemoryCacheProvider(
            max_size=app_settings.memory_cache_max_size,
            ttl=app_settings.cache_ttl,
        )
    raise ConfigurationError(
        f"Unknown CACHE_BACKEND {app_settings.cache_backend!r}; expected 'redis' or 'memory'"
    )


def _build_all(app_settings: Settings, app_config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    http_client = _build_http_client(app_settings)
    cache_provider = _build_cache_provider(app_settings)

    artwork_provider = PixivArtworkProvider(
        http_client=http_client,
        base_url=app_settings.upstream_base_url,
    )
    artwork_cache = ArtworkCache(
        provider=cache_provider,
        ttl=app_settings.cache_ttl,
        key_prefix=app_settings.cache_key_prefix,
    )
    resolver = ArtworkResolver(
        provider=artwork_provider,
        cache=artwork_cache,
        max_retries=app_settings.upstream_max_retries,
        retry_backoff=app_settings.upstream_retry_backoff,
    )

    return {
        "http_client": http_client,
        "cache_provider": cache_provider,
        "artwork_provider": artwork_provider,
        "resolver": resolver,
        "request_timeout": app_settings.request_timeout,
        "intro_text": app_config.get("app", {}).get("intro"),
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build all components on startup, close network clients on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    cache_provider: ICacheProvider = components["cache_provider"]
    cache_ok = await cache_provider.ping()
    if not cache_ok:
        # Requests still work; every one of them goes to Pixiv until the cache is back.
        _logger.warning("cache_unreachable_at_startup", backend=cache_provider.get_provider_name())

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=settings.app_env,
        cache_backend=cache_provider.get_provider_name(),
        cache_ok=cache_ok,
        cache_ttl=settings.cache_ttl,
        upstream=settings.upstream_base_url,
        request_timeout=settings.request_timeout,
        max_concurrent_requests=settings.max_concurrent_requests,
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    await cache_provider.close()
    _logger.info("app_shutdown", message="HTTP client and cache connections closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_config: dict[str, Any] | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_config = config if app_config is None else app_config

    application = FastAPI(
        title="Pixum",
        version=_VERSION,
        description=(
            "Stable URLs for Pixiv artworks: metadata as JSON and image "
            "redirects, cached in Redis to spare Pixiv's rate-limited API."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(
        SecurityHeadersMiddleware,
        headers=app_config.get("security_headers"),
    )
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(
        application,
        allowed_origins=app_config.get("cors", {}).get("allowed_origins"),
    )
    application.add_middleware(GZipMiddleware, minimum_size=1024)
    application.add_middleware(
        ConcurrencyLimitMiddleware,
        limit=settings.max_concurrent_requests,
    )

    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=config["app"]["host"],
        port=config["app"]["port"],
        reload=(config["app"]["env"] == "development"),
    )
