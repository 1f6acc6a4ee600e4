"""Pydantic models describing the Open Library search payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OpenLibraryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SearchDoc(OpenLibraryBaseModel):
    title: str | None = None
    cover_i: int | None = None
    isbn: list[str] = Field(default_factory=list[str])


class SearchResponse(OpenLibraryBaseModel):
    num_found: int = Field(default=0, alias="numFound")
    docs: list[SearchDoc] = Field(default_factory=list[SearchDoc])
