"""Pydantic models describing the YouTube Data API search payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class YouTubeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Thumbnail(YouTubeBaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class SearchResultId(YouTubeBaseModel):
    kind: str | None = None
    video_id: str | None = Field(default=None, alias="videoId")


class Snippet(YouTubeBaseModel):
    title: str | None = None
    thumbnails: dict[str, Thumbnail] = Field(default_factory=dict[str, Thumbnail])


class SearchResult(YouTubeBaseModel):
    id: SearchResultId
    snippet: Snippet


class SearchListResponse(YouTubeBaseModel):
    items: list[SearchResult] = Field(default_factory=list[SearchResult])
