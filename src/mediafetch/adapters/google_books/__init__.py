"""Google Books source adapter."""

from __future__ import annotations

from .source import GoogleBooksSource

__all__ = ["GoogleBooksSource"]
