"""Presets binding sources, cache layout and throttling for each kind of media."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RecordLayout:
    """JSON field names used by one family's input list and cache file."""

    records_field: str
    creator_field: str
    url_field: str
    with_field: str
    without_field: str


@dataclass(frozen=True, slots=True)
class MediaFamily:
    name: str
    source_names: tuple[str, ...]
    layout: RecordLayout
    input_filename: str
    cache_filename: str
    delay_seconds: float
    title_first_key: bool = False
    strict_priority: bool = True

    @property
    def preferred_source(self) -> str | None:
        """Source tag a cached record must carry to be skipped, if any."""

        if not self.strict_priority:
            return None
        return self.source_names[0]


ARTWORKS: Final[MediaFamily] = MediaFamily(
    name="artworks",
    source_names=("wikimedia", "met", "aic"),
    layout=RecordLayout(
        records_field="artworks",
        creator_field="artist",
        url_field="imageUrl",
        with_field="withImages",
        without_field="withoutImages",
    ),
    input_filename="365-artworks-uk.json",
    cache_filename="artwork-cache.json",
    delay_seconds=0.2,
)

BOOKS: Final[MediaFamily] = MediaFamily(
    name="books",
    source_names=("openlibrary", "google"),
    layout=RecordLayout(
        records_field="books",
        creator_field="author",
        url_field="coverUrl",
        with_field="withCovers",
        without_field="withoutCovers",
    ),
    input_filename="books.json",
    cache_filename="book-covers-cache.json",
    delay_seconds=0.15,
    title_first_key=True,
    strict_priority=False,
)

VIDEOS: Final[MediaFamily] = MediaFamily(
    name="videos",
    source_names=("youtube",),
    layout=RecordLayout(
        records_field="videos",
        creator_field="artist",
        url_field="thumbnailUrl",
        with_field="withThumbnails",
        without_field="withoutThumbnails",
    ),
    input_filename="videos.json",
    cache_filename="youtube-cache.json",
    delay_seconds=0.2,
)

FAMILIES: Final[dict[str, MediaFamily]] = {
    family.name: family for family in (ARTWORKS, BOOKS, VIDEOS)
}


def get_family(name: str) -> MediaFamily:
    try:
        return FAMILIES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown media family: {name}") from None
