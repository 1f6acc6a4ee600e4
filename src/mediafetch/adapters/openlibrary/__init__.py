"""Open Library source adapter."""

from __future__ import annotations

from .source import OpenLibrarySource, cover_url

__all__ = ["OpenLibrarySource", "cover_url"]
