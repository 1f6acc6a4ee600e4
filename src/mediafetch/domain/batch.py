"""Sequential batch run over an entity list."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .cache import compute_stats
from .types import CacheRecord, RunCounters

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .cache import MediaCache
    from .ports.persistence import CacheRepository
    from .resolution import ResolutionPipeline
    from .types import Entity, EntityKey, SourceTag, StatsSummary

log = getLogger(__name__)

Sleeper = Callable[[float], Awaitable[object]]

DEFAULT_DELAY_SECONDS = 0.2
PROGRESS_EVERY = 50


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class BatchRequest:
    """Per-run knobs; family presets fill these in."""

    delay_seconds: float = DEFAULT_DELAY_SECONDS
    preferred_source: SourceTag | None = None
    title_first_key: bool = False
    checkpoint_every: int | None = None


@dataclass(slots=True)
class BatchOrchestrator:
    """Drive the resolution pipeline over every entity, one at a time.

    Entities are never processed concurrently: the next entity's requests only start
    after the previous entity has been fully resolved and ``delay_seconds`` elapsed.
    That spacing is what keeps the public catalogs from throttling us.
    """

    pipeline: ResolutionPipeline
    repository: CacheRepository
    sleep: Sleeper = asyncio.sleep
    clock: Callable[[], datetime] = _utcnow

    def run(
        self,
        entities: Sequence[Entity],
        cache: MediaCache,
        request: BatchRequest | None = None,
    ) -> StatsSummary:
        return asyncio.run(self.run_async(entities, cache, request))

    async def run_async(
        self,
        entities: Sequence[Entity],
        cache: MediaCache,
        request: BatchRequest | None = None,
    ) -> StatsSummary:
        active = request or BatchRequest()
        counters = RunCounters()
        total = len(entities)
        keys: list[EntityKey] = []
        owners: dict[EntityKey, Entity] = {}
        attempted = 0

        async with self.pipeline:
            for entity in entities:
                key = entity.key(title_first=active.title_first_key)
                keys.append(key)
                owner = owners.setdefault(key, entity)
                if owner is not entity:
                    log.warning(
                        "Entity %d %r shares cache key %s with entity %d; "
                        "both map to one record",
                        entity.index,
                        entity.title,
                        key,
                        owner.index,
                    )

                if cache.should_skip(key, preferred_source=active.preferred_source):
                    counters.already_cached += 1
                    if entity.index % PROGRESS_EVERY == 0:
                        log.info(
                            "Progress: %d/%d (%d cached, %d new, %d failed)",
                            entity.index,
                            total,
                            counters.already_cached,
                            counters.newly_fetched,
                            counters.failed,
                        )
                    continue

                log.info(
                    "[%d/%d] %s by %s", entity.index + 1, total, entity.title, entity.creator
                )
                outcome = await self.pipeline.resolve(entity.query())
                cache.put(key, CacheRecord.from_outcome(entity, outcome))
                if outcome is None:
                    counters.failed += 1
                    log.info("  no media found")
                else:
                    counters.newly_fetched += 1
                    log.info("  found via %s", outcome.source)

                attempted += 1
                if active.checkpoint_every and attempted % active.checkpoint_every == 0:
                    self._persist(cache, keys, total=total, counters=counters)
                    log.info("Checkpoint written after %d lookups", attempted)

                await self.sleep(active.delay_seconds)

        stats = self._persist(cache, keys, total=total, counters=counters)
        log.info(
            "Finished: %d/%d with media (%d%%), new=%d, cached=%d, failed=%d, sources=%s",
            stats.with_media,
            stats.total,
            stats.percentage,
            stats.newly_fetched,
            stats.already_cached,
            stats.failed,
            dict(stats.sources),
        )
        return stats

    def _persist(
        self,
        cache: MediaCache,
        keys: Sequence[EntityKey],
        *,
        total: int,
        counters: RunCounters,
    ) -> StatsSummary:
        stats = compute_stats(
            cache,
            keys,
            total=total,
            counters=counters,
            source_names=self.pipeline.source_names,
        )
        cache.stats = stats
        cache.last_updated = self.clock()
        self.repository.persist(cache)
        return stats
