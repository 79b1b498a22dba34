"""Unit tests for ArtworkMetadata and the Resolution result types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.models.artwork import ArtworkMetadata
from src.models.resolution import ErrorResult, MetadataResult, Redirect
from src.utils.errors import ErrorKind


class TestArtworkMetadata:
    def test_serialises_with_camel_case_aliases(self, sample_artwork: ArtworkMetadata) -> None:
        data = sample_artwork.model_dump(mode="json", by_alias=True)
        assert data["contentId"] == 100
        assert data["pageCount"] == 3
        assert data["authorId"] == 11
        assert data["lastModified"] == "2023-01-02T03:04:05+00:00"
        assert len(data["pages"]) == 3

    def test_json_round_trip_accepts_aliases(self, sample_artwork: ArtworkMetadata) -> None:
        restored = ArtworkMetadata.model_validate_json(sample_artwork.model_dump_json(by_alias=True))
        assert restored == sample_artwork

    def test_page_count_must_match_pages(self) -> None:
        with pytest.raises(ValidationError):
            ArtworkMetadata(
                content_id=1, title="t", author="a", page_count=2, pages=["https://x/1.png"]
            )

    def test_content_id_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ArtworkMetadata(content_id=0, title="t", author="a", page_count=1, pages=["https://x"])

    def test_is_frozen(self, sample_artwork: ArtworkMetadata) -> None:
        with pytest.raises(ValidationError):
            sample_artwork.title = "changed"  # type: ignore[misc]


class TestResolution:
    def test_variants_are_tagged(self, sample_artwork: ArtworkMetadata) -> None:
        assert Redirect(url="https://i.pximg.net/a.png").kind == "redirect"
        assert MetadataResult(artwork=sample_artwork).kind == "metadata"
        error = ErrorResult(error_kind=ErrorKind.NOT_FOUND, error_name="NotFoundError", message="gone")
        assert error.kind == "error"
