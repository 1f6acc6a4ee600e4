"""YouTube Data API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger

from .catalogs import get_catalog_resilience
from .env import require_env_var
from .errors import MissingConfigurationError
from .http_resilience import ResilienceConfig

log = getLogger(__name__)

YOUTUBE_API_KEY_ENV = "YOUTUBE_API_KEY"


@dataclass(frozen=True)
class YouTubeConfig:
    """Holds the YouTube API key and transport settings.

    ``api_key`` may be ``None``: the source then fails every lookup instead of
    aborting the run.
    """

    api_key: str | None
    resilience: ResilienceConfig


def get_youtube_config(*, resilience: ResilienceConfig | None = None) -> YouTubeConfig:
    try:
        api_key: str | None = require_env_var(YOUTUBE_API_KEY_ENV)
    except MissingConfigurationError as exc:
        log.warning("%s; YouTube lookups will return no results", exc)
        api_key = None
    return YouTubeConfig(
        api_key=api_key,
        resilience=resilience or get_catalog_resilience("youtube"),
    )
