"""Pydantic models describing the Met collection API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MetBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectSearchResponse(MetBaseModel):
    total: int = 0
    object_ids: list[int] = Field(default_factory=list[int], alias="objectIDs")

    @field_validator("object_ids", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        # the API answers ``"objectIDs": null`` when nothing matches
        return [] if value is None else value


class MetObject(MetBaseModel):
    object_id: int = Field(alias="objectID")
    title: str | None = None
    primary_image: str | None = Field(default=None, alias="primaryImage")
    artist_display_name: str | None = Field(default=None, alias="artistDisplayName")
