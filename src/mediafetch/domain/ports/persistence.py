"""Persistence ports for the media cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mediafetch.domain.cache import MediaCache


class CachePersistError(RuntimeError):
    """Raised when the cache cannot be written; the run's progress is lost."""


class CacheRepository(Protocol):
    def load(self) -> MediaCache:
        """Return the stored cache, or an empty one when nothing usable is stored."""
        ...

    def persist(self, cache: MediaCache) -> None:
        """Replace the stored cache with ``cache`` or raise ``CachePersistError``."""
        ...


__all__ = ["CachePersistError", "CacheRepository"]
