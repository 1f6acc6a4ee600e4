"""JSON file persistence for the media cache."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, cast

from mediafetch.domain.cache import MediaCache
from mediafetch.domain.ports.persistence import CachePersistError
from mediafetch.domain.types import CacheRecord

if TYPE_CHECKING:
    from pathlib import Path

    from mediafetch.config.families import RecordLayout
    from mediafetch.domain.ports.persistence import CacheRepository
    from mediafetch.domain.types import StatsSummary

log = getLogger(__name__)

JsonObject = dict[str, object]


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(slots=True)
class JsonCacheRepository:
    """Cache file in the layout of one media family.

    Reads never fail: a missing or corrupt file yields an empty cache. Writes go to a
    temporary sibling first and are moved into place, so readers see either the old
    or the new file.
    """

    path: Path
    layout: RecordLayout

    def load(self) -> MediaCache:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            log.info("No existing cache at %s, starting fresh", self.path)
            return MediaCache()
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable cache %s: %s", self.path, exc)
            return MediaCache()

        if not isinstance(raw, Mapping):
            log.warning("Ignoring cache %s: top-level value is not an object", self.path)
            return MediaCache()
        document = cast(Mapping[str, object], raw)

        records: dict[str, CacheRecord] = {}
        raw_records = document.get(self.layout.records_field)
        if isinstance(raw_records, Mapping):
            for key, item in cast(Mapping[str, object], raw_records).items():
                record = self._decode_record(item)
                if record is None:
                    log.warning("Dropping malformed cache record %s", key)
                    continue
                records[key] = record

        log.info("Loaded %d cached records from %s", len(records), self.path)
        return MediaCache(
            records=records,
            last_updated=parse_timestamp(document.get("lastUpdated")),
        )

    def persist(self, cache: MediaCache) -> None:
        document = self.encode(cache)
        text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"

        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
            raise CachePersistError(f"Could not write cache {self.path}: {exc}") from exc

        log.info("Cache saved to %s", self.path)

    def encode(self, cache: MediaCache) -> JsonObject:
        last_updated = cache.last_updated or datetime.now(UTC)
        return {
            "lastUpdated": format_timestamp(last_updated),
            "stats": self._encode_stats(cache.stats) if cache.stats is not None else {},
            self.layout.records_field: {
                key: self._encode_record(record) for key, record in cache.records.items()
            },
        }

    def _encode_record(self, record: CacheRecord) -> JsonObject:
        return {
            "day": record.index,
            "title": record.title,
            self.layout.creator_field: record.creator,
            self.layout.url_field: record.media_url,
            "source": record.source,
        }

    def _decode_record(self, item: object) -> CacheRecord | None:
        if not isinstance(item, Mapping):
            return None
        data = cast(Mapping[str, object], item)
        title = data.get("title")
        creator = data.get(self.layout.creator_field)
        index = data.get("day")
        if not isinstance(title, str) or not isinstance(creator, str):
            return None
        if not isinstance(index, int) or isinstance(index, bool):
            return None
        media_url = _optional_str(data.get(self.layout.url_field))
        return CacheRecord(
            index=index,
            title=title,
            creator=creator,
            media_url=media_url,
            source=_optional_str(data.get("source")) if media_url else None,
        )

    def _encode_stats(self, stats: StatsSummary) -> JsonObject:
        return {
            "total": stats.total,
            self.layout.with_field: stats.with_media,
            self.layout.without_field: stats.without_media,
            "percentage": stats.percentage,
            "newlyFetched": stats.newly_fetched,
            "alreadyCached": stats.already_cached,
            "failed": stats.failed,
            "sources": dict(stats.sources),
        }


if TYPE_CHECKING:

    def _repository_check(repository: JsonCacheRepository) -> CacheRepository:
        return repository
