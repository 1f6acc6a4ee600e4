"""Pydantic models describing the Art Institute of Chicago API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArticBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Artwork(ArticBaseModel):
    id: int
    title: str | None = None
    artist_display: str | None = None
    image_id: str | None = None


class ArtworkSearchResponse(ArticBaseModel):
    data: list[Artwork] = Field(default_factory=list[Artwork])
