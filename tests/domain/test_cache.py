from __future__ import annotations

from mediafetch.domain.cache import MediaCache, compute_stats, round_half_up
from mediafetch.domain.types import RunCounters
from tests.helpers.sources import make_entities, make_record


def _cache_with(*records: tuple[str, str | None, str | None]) -> MediaCache:
    cache = MediaCache()
    entities = make_entities(*((key, "Artist") for key, _, _ in records))
    for entity, (key, url, source) in zip(entities, records, strict=True):
        cache.put(key, make_record(entity, url, source))
    return cache


def test_has_get_and_put_overwrite() -> None:
    cache = _cache_with(("a", "https://x/1.jpg", "met"))

    assert cache.has("a")
    assert not cache.has("b")
    assert cache.get("b") is None

    [entity] = make_entities(("a", "Artist"))
    cache.put("a", make_record(entity, "https://x/2.jpg", "wikimedia"))

    record = cache.get("a")
    assert record is not None
    assert record.source == "wikimedia"
    assert len(cache) == 1


def test_should_skip_lenient_policy() -> None:
    cache = _cache_with(("hit", "https://x/1.jpg", "google"), ("miss", None, None))

    assert cache.should_skip("hit")
    assert not cache.should_skip("miss")
    assert not cache.should_skip("unknown")


def test_should_skip_strict_policy_only_for_preferred_source() -> None:
    cache = _cache_with(
        ("best", "https://x/1.jpg", "wikimedia"),
        ("weaker", "https://x/2.jpg", "aic"),
        ("miss", None, None),
    )

    assert cache.should_skip("best", preferred_source="wikimedia")
    assert not cache.should_skip("weaker", preferred_source="wikimedia")
    assert not cache.should_skip("miss", preferred_source="wikimedia")


def test_compute_stats_counts_sources_and_percentage() -> None:
    cache = _cache_with(
        ("a", "https://x/1.jpg", "wikimedia"),
        ("b", "https://x/2.jpg", "met"),
        ("c", None, None),
    )
    counters = RunCounters(newly_fetched=1, already_cached=1, failed=1)

    stats = compute_stats(
        cache,
        ["a", "b", "c"],
        total=3,
        counters=counters,
        source_names=("wikimedia", "met", "aic"),
    )

    assert stats.total == 3
    assert stats.with_media == 2
    assert stats.without_media == 1
    assert stats.percentage == 67
    assert stats.sources == {"wikimedia": 1, "met": 1, "aic": 0}
    assert (stats.newly_fetched, stats.already_cached, stats.failed) == (1, 1, 1)


def test_compute_stats_empty_input() -> None:
    stats = compute_stats(MediaCache(), [], total=0, counters=RunCounters())

    assert stats.percentage == 0
    assert stats.with_media == 0
    assert stats.without_media == 0


def test_round_half_up_matches_javascript_rounding() -> None:
    assert round_half_up(12.5) == 13
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2


def test_compute_stats_includes_records_from_earlier_inputs() -> None:
    cache = _cache_with(
        ("a", "https://x/1.jpg", "wikimedia"),
        ("b", None, None),
        ("old-1", "https://x/2.jpg", "aic"),
        ("old-2", "https://x/3.jpg", "wikimedia"),
    )

    stats = compute_stats(
        cache,
        ["a", "b"],
        total=2,
        counters=RunCounters(),
        source_names=("wikimedia", "met", "aic"),
    )

    assert stats.with_media == 3
    assert stats.without_media == 0
    assert stats.percentage == 150
    assert stats.sources == {"wikimedia": 2, "met": 0, "aic": 1}


def test_compute_stats_counts_shared_record_per_entity() -> None:
    cache = _cache_with(("a-b-c", "https://x/1.jpg", "wikimedia"), ("d", None, None))

    stats = compute_stats(
        cache,
        ["a-b-c", "a-b-c", "d"],
        total=3,
        counters=RunCounters(),
        source_names=("wikimedia",),
    )

    assert stats.with_media == 2
    assert stats.without_media == 1
    assert stats.percentage == 67
    assert stats.sources == {"wikimedia": 2}
