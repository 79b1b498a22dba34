"""Unit tests for the PixumError hierarchy."""

from __future__ import annotations

import pytest

from src.utils.errors import (
    CacheUnavailableError,
    ConfigurationError,
    ErrorKind,
    InvalidInputError,
    NotFoundError,
    PixumError,
    UpstreamProtocolError,
    UpstreamUnavailableError,
)


@pytest.mark.parametrize(
    "error_cls, kind",
    [
        (InvalidInputError, ErrorKind.INVALID_INPUT),
        (NotFoundError, ErrorKind.NOT_FOUND),
        (UpstreamUnavailableError, ErrorKind.UPSTREAM_UNAVAILABLE),
        (UpstreamProtocolError, ErrorKind.UPSTREAM_PROTOCOL_ERROR),
        (CacheUnavailableError, ErrorKind.CACHE_UNAVAILABLE),
        (ConfigurationError, ErrorKind.INTERNAL),
    ],
)
def test_each_error_carries_its_kind(error_cls, kind) -> None:
    exc = error_cls()
    assert isinstance(exc, PixumError)
    assert exc.kind is kind
    assert exc.message


def test_str_prefixes_provider_name() -> None:
    exc = UpstreamUnavailableError("Timed out", provider_name="pixiv")
    assert str(exc) == "[pixiv] Timed out"
    assert exc.message == "Timed out"


def test_str_without_provider_is_message() -> None:
    assert str(NotFoundError("gone")) == "gone"
