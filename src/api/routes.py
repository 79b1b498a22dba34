"""FastAPI routes for Pixum.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                 Method     Description
# ─────────────────────────────────────────────────────────────────────
# /                        GET        Plain-text introduction
# /health                  GET        Health check + cache reachability
# /{content_id}            GET, HEAD  Artwork metadata as JSON
# /{content_id}/{page}     GET, HEAD  302 redirect to the page's image URL
#
# Path parameters are declared as ``str`` and parsed by
# src.utils.identifiers, so malformed IDs produce our own 400
# ErrorResponse instead of FastAPI's 422 validation body, and are
# rejected before the resolver touches the cache or Pixiv.
#
# Each artwork request runs under one deadline (REQUEST_TIMEOUT); when it
# passes, the client gets a 502 UpstreamUnavailableError body.
#
# DEPENDENCY INJECTION PATTERN:
# The resolver, cache provider and deadline are built once in main.py's
# _build_all and stored on app.state; the helpers below pull them out per
# request.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from src.api.responses import render
from src.api.schemas import ErrorResponse, HealthResponse
from src.interfaces.cache_provider import ICacheProvider
from src.models.resolution import ErrorResult, Resolution
from src.services.artwork_resolver import ArtworkResolver
from src.utils.errors import InvalidInputError, PixumError, UpstreamUnavailableError
from src.utils.identifiers import parse_content_id, parse_page_number
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()

_DEFAULT_INTRO = "Welcome to Pixum"
_VERSION = "0.1.0"
_DEADLINE_MESSAGE = "Timed out waiting for Pixiv."
_ARTWORK_METHODS = ["GET", "HEAD"]

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed artwork ID or page number"},
    404: {"model": ErrorResponse, "description": "Artwork or page does not exist"},
    502: {"model": ErrorResponse, "description": "Pixiv unreachable, too slow or unparseable"},
}


# ---------------------------------------------------------------------------
# Dependency injection helpers -- resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_resolver(request: Request) -> ArtworkResolver:
    """Return the artwork resolver from application state."""
    return request.app.state.resolver


def _get_cache_provider(request: Request) -> ICacheProvider | None:
    """Return the raw cache provider from application state, or ``None``."""
    return getattr(request.app.state, "cache_provider", None)


def _get_request_timeout(request: Request) -> float | None:
    """Return the per-request deadline in seconds; ``None`` disables it."""
    return getattr(request.app.state, "request_timeout", None)


ResolverDep = Annotated[ArtworkResolver, Depends(_get_resolver)]
CacheProviderDep = Annotated[ICacheProvider | None, Depends(_get_cache_provider)]
RequestTimeoutDep = Annotated[float | None, Depends(_get_request_timeout)]


def _error(exc: PixumError) -> Resolution:
    return ErrorResult(error_kind=exc.kind, error_name=type(exc).__name__, message=exc.message)


async def _resolve_within(pending: Awaitable[Resolution], timeout: float | None) -> Resolution:
    """Await *pending*, turning a missed deadline into an upstream error.

    httpx's timeout bounds each phase of one Pixiv call; this bounds the
    whole resolution, including both metadata calls and any retries.
    """
    try:
        return await asyncio.wait_for(pending, timeout)
    except asyncio.TimeoutError:
        _logger.warning("request_deadline_exceeded", timeout=timeout)
        return _error(UpstreamUnavailableError(message=_DEADLINE_MESSAGE))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/", response_class=PlainTextResponse, summary="Introduction")
async def index(request: Request) -> PlainTextResponse:
    intro = getattr(request.app.state, "intro_text", None) or _DEFAULT_INTRO
    return PlainTextResponse(intro)


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(cache_provider: CacheProviderDep) -> HealthResponse:
    """Report whether the cache store is reachable.

    A down cache only degrades the service (every request goes to Pixiv),
    so the status is ``degraded`` rather than ``unhealthy``.
    """
    cache_ok = await cache_provider.ping() if cache_provider is not None else False
    return HealthResponse(
        status="healthy" if cache_ok else "degraded",
        version=_VERSION,
        providers={"cache": cache_ok, "upstream": True},
    )


@router.api_route(
    "/{content_id}",
    methods=_ARTWORK_METHODS,
    summary="Artwork metadata",
    responses=_ERROR_RESPONSES,
)
async def artwork_info(
    content_id: str, resolver: ResolverDep, timeout: RequestTimeoutDep
) -> Response:
    try:
        cid = parse_content_id(content_id)
    except InvalidInputError as exc:
        return render(_error(exc))

    structlog.contextvars.bind_contextvars(content_id=cid)
    try:
        return render(await _resolve_within(resolver.resolve_metadata_result(cid), timeout))
    finally:
        structlog.contextvars.unbind_contextvars("content_id")


@router.api_route(
    "/{content_id}/{page}",
    methods=_ARTWORK_METHODS,
    summary="Redirect to an artwork image",
    status_code=302,
    responses=_ERROR_RESPONSES,
)
async def artwork_source(
    content_id: str, page: str, resolver: ResolverDep, timeout: RequestTimeoutDep
) -> Response:
    try:
        cid = parse_content_id(content_id)
        page_no = parse_page_number(page)
    except InvalidInputError as exc:
        return render(_error(exc))

    structlog.contextvars.bind_contextvars(content_id=cid, page=page_no)
    try:
        return render(
            await _resolve_within(resolver.resolve_page_result(cid, page_no), timeout)
        )
    finally:
        structlog.contextvars.unbind_contextvars("content_id", "page")
