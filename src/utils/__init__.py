"""Utility modules for Pixum.

- **errors** -- exception hierarchy rooted at PixumError; each class carries
  the ErrorKind the HTTP layer maps to a status code.
- **identifiers** -- strict parsing of artwork IDs and page numbers from
  request paths.
- **logging** -- structlog setup with console output in development and
  JSON in production.
"""

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
from src.utils.identifiers import parse_content_id, parse_page_number
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "CacheUnavailableError",
    "ConfigurationError",
    "ErrorKind",
    "InvalidInputError",
    "NotFoundError",
    "PixumError",
    "UpstreamProtocolError",
    "UpstreamUnavailableError",
    "configure_logging",
    "get_logger",
    "parse_content_id",
    "parse_page_number",
]
