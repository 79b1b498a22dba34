"""Custom exception hierarchy for Pixum.

All application exceptions inherit from :class:`PixumError`, which carries
an optional ``provider_name`` so error handlers can identify which external
service (e.g. "pixiv", "redis") caused the failure, and an
:class:`ErrorKind` that the HTTP layer maps to a status code.

The hierarchy is organized by where the failure originates:

    PixumError  (base -- catch-all for any Pixum error)
    +-- InvalidInputError        (malformed path parameter, never reaches I/O)
    +-- NotFoundError            (artwork or page does not exist upstream)
    +-- UpstreamUnavailableError (Pixiv unreachable, timed out, non-2xx)
    +-- UpstreamProtocolError    (Pixiv answered in an unparseable shape)
    +-- CacheUnavailableError    (key-value store down -- absorbed as a miss)
    +-- ConfigurationError       (startup / missing config)

``NotFoundError`` is permanent, ``UpstreamUnavailableError`` is transient.
Callers rely on that distinction, so the resolver propagates these classes
unchanged instead of wrapping them in a generic failure.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Failure categories surfaced to the request handlers."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_PROTOCOL_ERROR = "UPSTREAM_PROTOCOL_ERROR"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"
    INTERNAL = "INTERNAL"


class PixumError(Exception):
    """Base exception for all Pixum errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[pixiv] Request timed out``.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------

class InvalidInputError(PixumError):
    """Raised when a content ID or page number is not a valid integer."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(
        self,
        message: str = "The requested URL is invalid.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Upstream (Pixiv) errors
# ---------------------------------------------------------------------------

class NotFoundError(PixumError):
    """Raised when the artwork, or the requested page of it, does not exist.

    This is a permanent condition: it is neither retried nor cached.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str = (
            "Information of the requested work could not be retrieved. "
            "The work might be deleted or have limited visibility."
        ),
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UpstreamUnavailableError(PixumError):
    """Raised when Pixiv is unreachable, times out, or answers with an error status."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE

    def __init__(
        self,
        message: str = "Failed to get response from Pixiv server.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UpstreamProtocolError(PixumError):
    """Raised when Pixiv responds but the body does not have the expected shape."""

    kind = ErrorKind.UPSTREAM_PROTOCOL_ERROR

    def __init__(
        self,
        message: str = "Pixiv returned a response that could not be parsed.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Cache errors
# ---------------------------------------------------------------------------

class CacheUnavailableError(PixumError):
    """Raised by cache providers when the key-value store cannot be reached.

    Never surfaced to clients: the resolver downgrades it to a cache miss.
    """

    kind = ErrorKind.CACHE_UNAVAILABLE

    def __init__(
        self,
        message: str = "Cache store is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(PixumError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
