"""Unit tests for artwork ID and page number parsing."""

from __future__ import annotations

import pytest

from src.utils.errors import ErrorKind, InvalidInputError
from src.utils.identifiers import parse_content_id, parse_page_number


class TestParseContentId:
    @pytest.mark.parametrize("value, expected", [("100", 100), (100, 100), ("0012", 12)])
    def test_accepts_positive_integers(self, value, expected) -> None:
        assert parse_content_id(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["abc", "-1", -1, "0", 0, "", " 12", "12 ", "+12", "1.5", "１２", "²", True, None, 1.0],
    )
    def test_rejects_everything_else(self, value) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            parse_content_id(value)
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_rejects_absurdly_long_ids(self) -> None:
        with pytest.raises(InvalidInputError):
            parse_content_id("9" * 40)


class TestParsePageNumber:
    def test_none_means_first_page(self) -> None:
        assert parse_page_number(None) == 0

    @pytest.mark.parametrize("value, expected", [("0", 0), (0, 0), ("2", 2), (7, 7)])
    def test_accepts_non_negative_integers(self, value, expected) -> None:
        assert parse_page_number(value) == expected

    @pytest.mark.parametrize("value", ["-1", -1, "x", "1e3", False])
    def test_rejects_invalid_pages(self, value) -> None:
        with pytest.raises(InvalidInputError):
            parse_page_number(value)
