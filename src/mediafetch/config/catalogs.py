"""Endpoints and transport settings for the public catalogs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from mediafetch import __version__

from .env import optional_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .storage import get_storage_config

if TYPE_CHECKING:
    from .storage import StorageConfig

WIKIMEDIA_API_URL: Final[str] = "https://commons.wikimedia.org/w/"
MET_API_URL: Final[str] = "https://collectionapi.metmuseum.org/public/collection/v1/"
ARTIC_API_URL: Final[str] = "https://api.artic.edu/api/v1/"
ARTIC_IIIF_URL: Final[str] = "https://www.artic.edu/iiif/2"
OPENLIBRARY_API_URL: Final[str] = "https://openlibrary.org/"
OPENLIBRARY_COVERS_URL: Final[str] = "https://covers.openlibrary.org/b"
GOOGLE_BOOKS_API_URL: Final[str] = "https://www.googleapis.com/books/v1/"
YOUTUBE_API_URL: Final[str] = "https://www.googleapis.com/youtube/v3/"

# Requests per second, per catalog client. The batch delay already spaces entities;
# these bound the burst of search + detail calls inside a single resolution.
_RATE_LIMITS: Final[dict[str, RateLimit]] = {
    "wikimedia": RateLimit(max_calls=10, per_seconds=1.0),
    "met": RateLimit(max_calls=20, per_seconds=1.0),
    "aic": RateLimit(max_calls=5, per_seconds=1.0),
    "openlibrary": RateLimit(max_calls=5, per_seconds=1.0),
    "google": RateLimit(max_calls=5, per_seconds=1.0),
    "youtube": RateLimit(max_calls=5, per_seconds=1.0),
}

_BASE_URLS: Final[dict[str, str]] = {
    "wikimedia": WIKIMEDIA_API_URL,
    "met": MET_API_URL,
    "aic": ARTIC_API_URL,
    "openlibrary": OPENLIBRARY_API_URL,
    "google": GOOGLE_BOOKS_API_URL,
    "youtube": YOUTUBE_API_URL,
}


@dataclass(frozen=True, slots=True)
class HttpSettings:
    """Settings shared by every catalog client."""

    user_agent: str
    cache: CacheConfig | None = None


def get_http_settings(*, storage: StorageConfig | None = None) -> HttpSettings:
    user_agent = optional_env_var("MEDIAFETCH_USER_AGENT") or f"mediafetch/{__version__}"
    mode = (optional_env_var("MEDIAFETCH_HTTP_CACHE") or "off").lower()

    cache: CacheConfig | None
    if mode == "off":
        cache = None
    elif mode == "memory":
        cache = CacheConfig(backend="memory")
    elif mode == "sqlite":
        storage_config = storage or get_storage_config()
        cache = CacheConfig(backend="sqlite", sqlite_path=str(storage_config.http_cache_path()))
    else:
        raise ConfigurationError(f"Unsupported MEDIAFETCH_HTTP_CACHE value: {mode}")

    return HttpSettings(user_agent=user_agent, cache=cache)


def get_catalog_resilience(
    name: str,
    *,
    settings: HttpSettings | None = None,
) -> ResilienceConfig:
    """Build the transport configuration for the catalog tagged ``name``."""

    if name not in _BASE_URLS:
        raise ConfigurationError(f"Unknown catalog: {name}")
    http = settings or get_http_settings()
    return ResilienceConfig(
        name=name,
        base_url=_BASE_URLS[name],
        ratelimit=_RATE_LIMITS[name],
        cache=http.cache,
        default_headers={"User-Agent": http.user_agent, "Accept": "application/json"},
    )
