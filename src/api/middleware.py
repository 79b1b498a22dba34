"""API middleware -- CORS, security headers, request logging, and error handling.

# ─── MIDDLEWARE EXECUTION ORDER ───────────────────────────────────────
#
# Starlette middleware is a stack (LIFO -- last added, first executed).
# main.py adds them in this order:
#
#     app.add_middleware(ErrorHandlingMiddleware)
#     app.add_middleware(SecurityHeadersMiddleware)
#     app.add_middleware(RequestLoggingMiddleware)
#     configure_cors(app)
#     app.add_middleware(GZipMiddleware)
#     app.add_middleware(ConcurrencyLimitMiddleware)
#
#   Request flow:
#     Client → ConcurrencyLimit → GZip → CORS → RequestLogging
#            → SecurityHeaders → ErrorHandling → route handler
#
# So RequestLoggingMiddleware sees the final status code, and the security
# headers are applied to error bodies produced by ErrorHandlingMiddleware.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp, Receive, Scope, Send

from src.api.responses import error_response, error_status
from src.utils.errors import PixumError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# Hardening applied to every response when config.yaml does not override it.
DEFAULT_SECURITY_HEADERS: dict[str, str] = {
    "Strict-Transport-Security": "max-age=63072000; includeSubDomains; preload",
    "Content-Security-Policy": (
        "default-src 'none'; frame-ancestors 'none'; upgrade-insecure-requests;"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-Robots-Tag": "noindex",
}


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Pixum exists to make Pixiv artworks loadable from other origins, so all
    origins are allowed by default.  Only ``GET`` and ``HEAD`` are exposed and no
    credentials are accepted.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Concurrency limit
# ---------------------------------------------------------------------------


class ConcurrencyLimitMiddleware:
    """Cap the number of HTTP requests handled at once.

    Requests past *limit* wait for a free slot rather than being rejected,
    so a burst queues in the process instead of fanning out to Pixiv.
    Lifespan and websocket scopes pass straight through.
    """

    def __init__(self, app: ASGIApp, limit: int = 100) -> None:
        self.app = app
        self._limit = limit
        self._semaphore = asyncio.Semaphore(limit)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        if self._semaphore.locked():
            _logger.debug("concurrency_limit_reached", limit=self._limit)
        async with self._semaphore:
            await self.app(scope, receive, send)


# ---------------------------------------------------------------------------
# Security headers
# ---------------------------------------------------------------------------


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set fixed security headers on every response, overriding route values."""

    def __init__(self, app: ASGIApp, headers: Mapping[str, str] | None = None) -> None:
        super().__init__(app)
        self._headers = dict(headers if headers is not None else DEFAULT_SECURITY_HEADERS)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers[name] = value
        return response


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``PixumError`` subclasses that escape a route.

    Routes normally render errors themselves through the ``Resolution``
    result type; this is the backstop.  The status code follows the same
    ``ErrorKind`` mapping, the client sees the exception class name and
    message only, and the details go to the server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except PixumError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            return error_response(error_status(exc.kind), type(exc).__name__, exc.message)


# ---------------------------------------------------------------------------
# Fallback for unmatched routes
# ---------------------------------------------------------------------------


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render Starlette/FastAPI HTTP errors in the ``ErrorResponse`` shape.

    Unmatched paths (e.g. ``/100/0/extra``) get the same "invalid URL"
    message as malformed IDs.
    """
    if exc.status_code == 404:
        return error_response(404, "NotFound", "The requested URL is invalid.")
    response = error_response(exc.status_code, "HTTPException", str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response
