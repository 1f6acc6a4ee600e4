"""Pydantic models describing the Google Books volumes payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GoogleBooksBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ImageLinks(GoogleBooksBaseModel):
    small_thumbnail: str | None = Field(default=None, alias="smallThumbnail")
    thumbnail: str | None = None
    small: str | None = None
    medium: str | None = None
    large: str | None = None
    extra_large: str | None = Field(default=None, alias="extraLarge")


class VolumeInfo(GoogleBooksBaseModel):
    title: str | None = None
    authors: list[str] = Field(default_factory=list[str])
    image_links: ImageLinks | None = Field(default=None, alias="imageLinks")


class Volume(GoogleBooksBaseModel):
    id: str | None = None
    volume_info: VolumeInfo = Field(default_factory=VolumeInfo, alias="volumeInfo")


class VolumesResponse(GoogleBooksBaseModel):
    total_items: int = Field(default=0, alias="totalItems")
    items: list[Volume] = Field(default_factory=list[Volume])
