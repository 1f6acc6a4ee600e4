"""Art Institute of Chicago source adapter."""

from __future__ import annotations

from .source import ArticSource, iiif_image_url

__all__ = ["ArticSource", "iiif_image_url"]
