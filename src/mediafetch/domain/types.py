"""Core value types for media resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Mapping

EntityKey: TypeAlias = str
SourceTag: TypeAlias = str

_KEY_FORBIDDEN = re.compile(r"[^a-z0-9-]")


def entity_key(creator: str, title: str, *, title_first: bool = False) -> EntityKey:
    """Derive the cache key for an entity.

    Every character outside ``[a-z0-9-]`` is replaced by ``-`` one for one, so keys
    stay compatible with cache files written by earlier versions. Distinct entities
    may collide on the same key.
    """

    raw = f"{title}-{creator}" if title_first else f"{creator}-{title}"
    return _KEY_FORBIDDEN.sub("-", raw.lower())


@dataclass(frozen=True, slots=True)
class Entity:
    """An item from the input list that needs a media URL."""

    title: str
    creator: str
    index: int

    def key(self, *, title_first: bool = False) -> EntityKey:
        return entity_key(self.creator, self.title, title_first=title_first)

    def query(self) -> MediaQuery:
        return MediaQuery(title=self.title, creator=self.creator)


@dataclass(frozen=True, slots=True)
class MediaQuery:
    """Normalised lookup input handed to every source."""

    title: str
    creator: str


@dataclass(frozen=True, slots=True)
class MediaResult:
    url: str
    source: SourceTag


@dataclass(slots=True)
class CacheRecord:
    """Persisted outcome for one entity key; ``media_url`` is ``None`` on failure."""

    index: int
    title: str
    creator: str
    media_url: str | None = None
    source: SourceTag | None = None

    @property
    def resolved(self) -> bool:
        return bool(self.media_url)

    @classmethod
    def from_outcome(cls, entity: Entity, outcome: MediaResult | None) -> CacheRecord:
        if outcome is None:
            return cls(index=entity.index, title=entity.title, creator=entity.creator)
        return cls(
            index=entity.index,
            title=entity.title,
            creator=entity.creator,
            media_url=outcome.url,
            source=outcome.source,
        )


@dataclass(slots=True)
class RunCounters:
    """What happened to each entity during the current run."""

    newly_fetched: int = 0
    already_cached: int = 0
    failed: int = 0


@dataclass(slots=True)
class StatsSummary:
    total: int
    with_media: int
    without_media: int
    percentage: int
    newly_fetched: int = 0
    already_cached: int = 0
    failed: int = 0
    sources: Mapping[SourceTag, int] = field(default_factory=dict[SourceTag, int])
