"""Wikimedia Commons source adapter."""

from __future__ import annotations

from .source import WikimediaSource

__all__ = ["WikimediaSource"]
