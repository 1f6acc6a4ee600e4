"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import CachePersistError, CacheRepository
from .sources import MediaSource

__all__ = [
    "CachePersistError",
    "CacheRepository",
    "MediaSource",
]
