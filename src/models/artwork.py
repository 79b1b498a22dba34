"""Pydantic v2 model for artwork metadata resolved from Pixiv.

The model is frozen (immutable) like every other domain model.  It is
rebuilt from Pixiv on each cache miss and only ever persisted as a cache
entry, so it carries no identity beyond ``content_id``.

Field names are snake_case in Python and camelCase on the wire
(``pageCount``, ``lastModified``) to match what clients of the original
service expect.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ArtworkMetadata(BaseModel):
    """Resolved record for a single Pixiv artwork."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    content_id: int = Field(gt=0, description="Pixiv illust ID.")
    title: str = Field(description="Artwork title as shown on Pixiv.")
    author: str = Field(description="Display name of the uploading user.")
    author_id: int | None = Field(default=None, description="Pixiv user ID of the author.")
    page_count: int = Field(ge=1, description="Number of images in the artwork.")
    pages: list[str] = Field(
        description="Original-resolution image URLs, ordered by page index."
    )
    last_modified: str | None = Field(
        default=None,
        description="Pixiv's uploadDate, used as a version signal when present.",
    )

    @model_validator(mode="after")
    def _pages_match_count(self) -> ArtworkMetadata:
        if len(self.pages) != self.page_count:
            raise ValueError(
                f"page_count is {self.page_count} but {len(self.pages)} page URLs were given"
            )
        return self
