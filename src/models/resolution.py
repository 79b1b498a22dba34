"""Tagged result type passed from the resolver to the request handlers.

Each variant has a literal ``kind`` field.  Handlers dispatch on ``kind``
to pick the transport response (redirect, JSON body, error body) instead
of inspecting exception or object types.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from src.models.artwork import ArtworkMetadata
from src.utils.errors import ErrorKind


class Redirect(BaseModel):
    """A page resolved to an upstream image URL."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["redirect"] = "redirect"
    url: str


class MetadataResult(BaseModel):
    """An artwork resolved to its full metadata record."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["metadata"] = "metadata"
    artwork: ArtworkMetadata


class ErrorResult(BaseModel):
    """A resolution that failed with a classified error."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    error_kind: ErrorKind
    error_name: str
    message: str


Resolution = Union[Redirect, MetadataResult, ErrorResult]
