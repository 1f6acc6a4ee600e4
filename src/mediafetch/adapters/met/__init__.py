"""Met collection source adapter."""

from __future__ import annotations

from .source import MetSource

__all__ = ["MetSource"]
