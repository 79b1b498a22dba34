"""Parsing of artwork identifiers taken from request paths.

Both parsers accept either an ``int`` or a string of ASCII decimal digits.
Anything else -- signs, whitespace, non-ASCII digits, ``bool`` -- raises
:class:`InvalidInputError` so that malformed input never reaches the cache
or Pixiv.
"""

from __future__ import annotations

import re

from src.utils.errors import InvalidInputError

# str.isdigit() also accepts characters like "²" and "٣"; only ASCII digits are valid here.
_DECIMAL_RE = re.compile(r"[0-9]+")

# Pixiv illust IDs fit comfortably in 32 bits; anything longer is not a real ID.
_MAX_DIGITS = 12


def _parse_non_negative(value: int | str, label: str) -> int:
    # bool is a subclass of int, so it must be rejected explicitly.
    if isinstance(value, bool):
        raise InvalidInputError(f"The {label} must be a decimal integer.")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DECIMAL_RE.fullmatch(value) and len(value) <= _MAX_DIGITS:
        number = int(value)
    else:
        raise InvalidInputError(f"The {label} must be a decimal integer.")

    if number < 0:
        raise InvalidInputError(f"The {label} must not be negative.")
    return number


def parse_content_id(value: int | str) -> int:
    """Return *value* as a positive artwork ID or raise ``InvalidInputError``."""
    content_id = _parse_non_negative(value, "artwork ID")
    if content_id == 0:
        raise InvalidInputError("The artwork ID must be a positive integer.")
    return content_id


def parse_page_number(value: int | str | None) -> int:
    """Return *value* as a zero-based page index; ``None`` means page 0."""
    if value is None:
        return 0
    return _parse_non_negative(value, "page number")
