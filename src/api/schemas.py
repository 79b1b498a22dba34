"""Pydantic response schemas for the Pixum API.

Artwork metadata is returned as :class:`~src.models.artwork.ArtworkMetadata`
directly (camelCase on the wire); the models here cover the remaining
bodies -- errors and the health check.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str = Field(description="Exception class name, e.g. NotFoundError.")
    detail: str | None = None


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, bool]
