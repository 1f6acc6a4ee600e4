"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from mediafetch.adapters.artic import ArticSource
from mediafetch.adapters.entity_list import load_entities
from mediafetch.adapters.google_books import GoogleBooksSource
from mediafetch.adapters.json_store import JsonCacheRepository
from mediafetch.adapters.met import MetSource
from mediafetch.adapters.openlibrary import OpenLibrarySource
from mediafetch.adapters.wikimedia import WikimediaSource
from mediafetch.adapters.youtube import YouTubeSource
from mediafetch.config import (
    ConfigurationError,
    get_catalog_resilience,
    get_http_settings,
    get_storage_config,
    get_youtube_config,
)
from mediafetch.domain.batch import BatchOrchestrator, BatchRequest
from mediafetch.domain.resolution import ResolutionPipeline

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from mediafetch.config import HttpSettings, MediaFamily
    from mediafetch.domain.batch import Sleeper
    from mediafetch.domain.ports.sources import MediaSource
    from mediafetch.domain.types import StatsSummary

log = getLogger(__name__)

SourceBuilder = Callable[["HttpSettings"], "MediaSource"]


def _youtube(settings: HttpSettings) -> MediaSource:
    config = get_youtube_config(resilience=get_catalog_resilience("youtube", settings=settings))
    return YouTubeSource.from_config(config)


SOURCE_BUILDERS: dict[str, SourceBuilder] = {
    "wikimedia": lambda s: WikimediaSource(
        resilience=get_catalog_resilience("wikimedia", settings=s)
    ),
    "met": lambda s: MetSource(resilience=get_catalog_resilience("met", settings=s)),
    "aic": lambda s: ArticSource(resilience=get_catalog_resilience("aic", settings=s)),
    "openlibrary": lambda s: OpenLibrarySource(
        resilience=get_catalog_resilience("openlibrary", settings=s)
    ),
    "google": lambda s: GoogleBooksSource(resilience=get_catalog_resilience("google", settings=s)),
    "youtube": _youtube,
}


def build_sources(
    family: MediaFamily,
    *,
    settings: HttpSettings | None = None,
) -> list[MediaSource]:
    """Instantiate the family's sources in priority order."""

    http = settings or get_http_settings()
    sources: list[MediaSource] = []
    for name in family.source_names:
        builder = SOURCE_BUILDERS.get(name)
        if builder is None:
            raise ConfigurationError(f"No source adapter registered for {name!r}")
        sources.append(builder(http))
    return sources


def fetch_media(
    family: MediaFamily,
    *,
    input_path: Path | None = None,
    cache_path: Path | None = None,
    delay_seconds: float | None = None,
    checkpoint_every: int | None = None,
    strict_priority: bool | None = None,
    sources: Sequence[MediaSource] | None = None,
    sleep: Sleeper | None = None,
) -> StatsSummary:
    """Resolve media for every entity of ``family`` and update its cache file.

    The entity list is loaded before anything else so a bad input aborts the run
    without touching the network.
    """

    storage = get_storage_config()
    entities_path = input_path or storage.data_path(family.input_filename)
    target_path = cache_path or storage.data_path(family.cache_filename)

    entities = load_entities(entities_path, family.layout)
    repository = JsonCacheRepository(path=target_path, layout=family.layout)
    cache = repository.load()

    pipeline = ResolutionPipeline(
        sources=tuple(sources) if sources is not None else tuple(build_sources(family))
    )
    strict = family.strict_priority if strict_priority is None else strict_priority
    preferred = pipeline.source_names[0] if strict and pipeline.sources else None
    request = BatchRequest(
        delay_seconds=family.delay_seconds if delay_seconds is None else delay_seconds,
        preferred_source=preferred,
        title_first_key=family.title_first_key,
        checkpoint_every=checkpoint_every,
    )

    orchestrator = BatchOrchestrator(pipeline=pipeline, repository=repository)
    if sleep is not None:
        orchestrator.sleep = sleep

    log.info(
        "Starting %s run: entities=%d, cached=%d, sources=%s, cache=%s",
        family.name,
        len(entities),
        len(cache),
        ", ".join(pipeline.source_names),
        target_path,
    )
    return orchestrator.run(entities, cache, request)
