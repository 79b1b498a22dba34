"""Pixum API layer -- routes, response rendering, schemas, and middleware."""

from src.api.middleware import (
    ConcurrencyLimitMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    http_exception_handler,
)
from src.api.responses import render
from src.api.routes import router
from src.api.schemas import ErrorResponse, HealthResponse

__all__ = [
    "ConcurrencyLimitMiddleware",
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "configure_cors",
    "http_exception_handler",
    "render",
    "router",
    "ErrorResponse",
    "HealthResponse",
]
