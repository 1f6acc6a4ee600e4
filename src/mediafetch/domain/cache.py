"""In-memory media cache and the statistics derived from it."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .types import CacheRecord, EntityKey, RunCounters, StatsSummary

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from .types import SourceTag


@dataclass(slots=True)
class MediaCache:
    """Entity-key to record mapping owned by a single batch run."""

    records: dict[EntityKey, CacheRecord] = field(default_factory=dict[EntityKey, CacheRecord])
    last_updated: datetime | None = None
    stats: StatsSummary | None = None

    def __len__(self) -> int:
        return len(self.records)

    def has(self, key: EntityKey) -> bool:
        return key in self.records

    def get(self, key: EntityKey) -> CacheRecord | None:
        return self.records.get(key)

    def put(self, key: EntityKey, record: CacheRecord) -> None:
        self.records[key] = record

    def should_skip(self, key: EntityKey, *, preferred_source: SourceTag | None = None) -> bool:
        """Return whether ``key`` is already resolved well enough to leave alone.

        Without ``preferred_source`` any resolved record counts. With it, only records
        from that source are skipped, so records pinned to a weaker source get another
        chance to upgrade while the best ones are never downgraded.
        """

        record = self.records.get(key)
        if record is None or not record.resolved:
            return False
        if preferred_source is None:
            return True
        return record.source == preferred_source


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_stats(
    cache: MediaCache,
    keys: Iterable[EntityKey],
    *,
    total: int,
    counters: RunCounters,
    source_names: Iterable[SourceTag] = (),
) -> StatsSummary:
    """Summarise every record in ``cache`` after a run.

    ``keys`` holds one key per input entity and ``total`` is the number of input
    entities. Records left over from earlier input lists still count. A record shared
    by several colliding entities counts once per entity.
    """

    per_key = Counter(keys)
    sources: Counter[SourceTag] = Counter({name: 0 for name in source_names})
    with_media = 0
    for key, record in cache.records.items():
        if not record.resolved:
            continue
        weight = max(per_key[key], 1)
        with_media += weight
        if record.source is not None:
            sources[record.source] += weight

    percentage = round_half_up(with_media * 100 / total) if total else 0
    return StatsSummary(
        total=total,
        with_media=with_media,
        without_media=max(total - with_media, 0),
        percentage=percentage,
        newly_fetched=counters.newly_fetched,
        already_cached=counters.already_cached,
        failed=counters.failed,
        sources=dict(sources),
    )
