"""Turns resolver results into HTTP responses.

``render`` dispatches on the ``kind`` tag of a :data:`Resolution`:

    redirect  -> 302 Found with ``Location`` set to the image URL
    metadata  -> 200 JSON body with camelCase artwork fields
    error     -> JSON :class:`ErrorResponse` with the mapped status code

The same status mapping is used by ``ErrorHandlingMiddleware`` for any
``PixumError`` that escapes a route.
"""

from __future__ import annotations

from typing import Callable

from fastapi import Response
from fastapi.responses import JSONResponse, RedirectResponse

from src.api.schemas import ErrorResponse
from src.models.resolution import ErrorResult, MetadataResult, Redirect, Resolution
from src.utils.errors import ErrorKind

# 302 rather than 301: Pixiv CDN URLs can rotate, so clients must not cache the target forever.
REDIRECT_STATUS = 302

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM_UNAVAILABLE: 502,
    ErrorKind.UPSTREAM_PROTOCOL_ERROR: 502,
    ErrorKind.CACHE_UNAVAILABLE: 500,
    ErrorKind.INTERNAL: 500,
}


def error_status(kind: ErrorKind) -> int:
    return ERROR_STATUS.get(kind, 500)


def error_response(status_code: int, error: str, detail: str | None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _render_redirect(result: Redirect) -> Response:
    return RedirectResponse(url=result.url, status_code=REDIRECT_STATUS)


def _render_metadata(result: MetadataResult) -> Response:
    return JSONResponse(content=result.artwork.model_dump(mode="json", by_alias=True))


def _render_error(result: ErrorResult) -> Response:
    return error_response(error_status(result.error_kind), result.error_name, result.message)


_RENDERERS: dict[str, Callable[..., Response]] = {
    "redirect": _render_redirect,
    "metadata": _render_metadata,
    "error": _render_error,
}


def render(result: Resolution) -> Response:
    """Build the transport response for *result*."""
    return _RENDERERS[result.kind](result)
