"""Pydantic models describing the Wikimedia Commons API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CommonsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SearchHit(CommonsBaseModel):
    title: str


class SearchQuery(CommonsBaseModel):
    search: list[SearchHit] = Field(default_factory=list[SearchHit])


class SearchResponse(CommonsBaseModel):
    query: SearchQuery | None = None

    @property
    def hits(self) -> list[SearchHit]:
        return self.query.search if self.query else []


class ImageInfo(CommonsBaseModel):
    url: str | None = None
    thumb_url: str | None = Field(default=None, alias="thumburl")


class ImagePage(CommonsBaseModel):
    title: str | None = None
    imageinfo: list[ImageInfo] = Field(default_factory=list[ImageInfo])


class ImageInfoQuery(CommonsBaseModel):
    pages: dict[str, ImagePage] = Field(default_factory=dict[str, ImagePage])


class ImageInfoResponse(CommonsBaseModel):
    query: ImageInfoQuery | None = None

    @property
    def first_page(self) -> ImagePage | None:
        if self.query is None or not self.query.pages:
            return None
        return next(iter(self.query.pages.values()))
