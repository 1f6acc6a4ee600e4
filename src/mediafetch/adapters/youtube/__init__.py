"""YouTube source adapter."""

from __future__ import annotations

from .source import YouTubeSource

__all__ = ["YouTubeSource"]
