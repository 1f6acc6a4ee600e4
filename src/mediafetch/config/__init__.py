"""Application configuration helpers."""

from __future__ import annotations

from .catalogs import HttpSettings, get_catalog_resilience, get_http_settings
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .families import ARTWORKS, BOOKS, FAMILIES, VIDEOS, MediaFamily, RecordLayout, get_family
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .youtube import YouTubeConfig, get_youtube_config

__all__ = [
    "ARTWORKS",
    "BOOKS",
    "FAMILIES",
    "VIDEOS",
    "CacheConfig",
    "ConfigurationError",
    "HttpSettings",
    "MediaFamily",
    "MissingConfigurationError",
    "RateLimit",
    "RecordLayout",
    "ResilienceConfig",
    "StorageConfig",
    "YouTubeConfig",
    "configure_logging",
    "get_catalog_resilience",
    "get_family",
    "get_http_settings",
    "get_storage_config",
    "get_youtube_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
