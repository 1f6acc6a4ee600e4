from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from mediafetch.adapters.artic import ArticSource
from mediafetch.adapters.entity_list import EntityListError
from mediafetch.adapters.google_books import GoogleBooksSource
from mediafetch.adapters.met import MetSource
from mediafetch.adapters.openlibrary import OpenLibrarySource
from mediafetch.adapters.wikimedia import WikimediaSource
from mediafetch.adapters.youtube import YouTubeSource
from mediafetch.app import build_sources, fetch_media
from mediafetch.config import ARTWORKS, BOOKS, VIDEOS, HttpSettings
from tests.helpers.sources import FakeSource, RecordingSleeper

if TYPE_CHECKING:
    from pathlib import Path


def _write_list(path: Path, items: list[dict[str, str]]) -> Path:
    path.write_text(json.dumps(items), encoding="utf-8")
    return path


def test_build_sources_follows_priority() -> None:
    settings = HttpSettings(user_agent="ua")

    artworks = build_sources(ARTWORKS, settings=settings)
    books = build_sources(BOOKS, settings=settings)
    videos = build_sources(VIDEOS, settings=settings)

    assert [type(s) for s in artworks] == [WikimediaSource, MetSource, ArticSource]
    assert [type(s) for s in books] == [OpenLibrarySource, GoogleBooksSource]
    assert [type(s) for s in videos] == [YouTubeSource]


def test_youtube_source_picks_up_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YOUTUBE_API_KEY", "abc")

    (source,) = build_sources(VIDEOS, settings=HttpSettings(user_agent="ua"))

    assert isinstance(source, YouTubeSource)
    assert source.api_key == "abc"


def test_fetch_media_writes_cache_file(tmp_path: Path) -> None:
    input_path = _write_list(
        tmp_path / "artworks.json",
        [
            {"title": "Starry Night", "artist": "Van Gogh"},
            {"title": "Water Lilies", "artist": "Monet"},
            {"title": "Untitled", "artist": "Anonymous"},
        ],
    )
    cache_path = tmp_path / "artwork-cache.json"
    wikimedia = FakeSource("wikimedia", {"Starry Night": "http://commons/starry.jpg"})
    met = FakeSource("met", {"Water Lilies": "https://met/lilies.jpg"})
    sleeper = RecordingSleeper()

    stats = fetch_media(
        ARTWORKS,
        input_path=input_path,
        cache_path=cache_path,
        sources=[wikimedia, met],
        sleep=sleeper,
    )

    assert stats.total == 3
    assert stats.with_media == 2
    assert stats.failed == 1
    assert stats.percentage == 67
    assert sleeper.delays == [0.2, 0.2, 0.2]

    document = json.loads(cache_path.read_text(encoding="utf-8"))
    assert document["stats"]["withImages"] == 2
    assert document["stats"]["withoutImages"] == 1
    assert document["stats"]["sources"] == {"wikimedia": 1, "met": 1}
    assert document["artworks"]["van-gogh-starry-night"]["imageUrl"] == (
        "https://commons/starry.jpg"
    )
    assert document["artworks"]["monet-water-lilies"]["source"] == "met"
    assert document["artworks"]["anonymous-untitled"]["imageUrl"] is None


def test_second_run_upgrades_only_non_preferred_records(tmp_path: Path) -> None:
    input_path = _write_list(
        tmp_path / "artworks.json",
        [
            {"title": "Starry Night", "artist": "Van Gogh"},
            {"title": "Water Lilies", "artist": "Monet"},
        ],
    )
    cache_path = tmp_path / "cache.json"
    first = [
        FakeSource("wikimedia", {"Starry Night": "https://commons/starry.jpg"}),
        FakeSource("met", {"Water Lilies": "https://met/lilies.jpg"}),
    ]
    fetch_media(
        ARTWORKS,
        input_path=input_path,
        cache_path=cache_path,
        sources=first,
        sleep=RecordingSleeper(),
    )

    wikimedia = FakeSource("wikimedia", default="https://commons/better.jpg")
    stats = fetch_media(
        ARTWORKS,
        input_path=input_path,
        cache_path=cache_path,
        sources=[wikimedia, FakeSource("met")],
        sleep=RecordingSleeper(),
    )

    assert [query.title for query in wikimedia.calls] == ["Water Lilies"]
    assert stats.already_cached == 1
    assert stats.newly_fetched == 1
    assert stats.sources == {"wikimedia": 2, "met": 0}


def test_books_are_lenient_and_keyed_title_first(tmp_path: Path) -> None:
    input_path = _write_list(
        tmp_path / "books.json", [{"title": "Dune", "author": "Frank Herbert"}]
    )
    cache_path = tmp_path / "covers.json"
    fetch_media(
        BOOKS,
        input_path=input_path,
        cache_path=cache_path,
        delay_seconds=0,
        sources=[FakeSource("openlibrary"), FakeSource("google", default="https://g/dune.jpg")],
        sleep=RecordingSleeper(),
    )

    openlibrary = FakeSource("openlibrary", default="https://ol/dune.jpg")
    stats = fetch_media(
        BOOKS,
        input_path=input_path,
        cache_path=cache_path,
        sources=[openlibrary, FakeSource("google")],
        sleep=RecordingSleeper(),
    )

    document = json.loads(cache_path.read_text(encoding="utf-8"))
    assert document["books"]["dune-frank-herbert"]["coverUrl"] == "https://g/dune.jpg"
    assert openlibrary.calls == []
    assert stats.already_cached == 1


def test_strict_priority_override_for_books(tmp_path: Path) -> None:
    input_path = _write_list(
        tmp_path / "books.json", [{"title": "Dune", "author": "Frank Herbert"}]
    )
    cache_path = tmp_path / "covers.json"
    fetch_media(
        BOOKS,
        input_path=input_path,
        cache_path=cache_path,
        sources=[FakeSource("openlibrary"), FakeSource("google", default="https://g/dune.jpg")],
        sleep=RecordingSleeper(),
    )

    openlibrary = FakeSource("openlibrary", default="https://ol/dune.jpg")
    fetch_media(
        BOOKS,
        input_path=input_path,
        cache_path=cache_path,
        strict_priority=True,
        sources=[openlibrary, FakeSource("google")],
        sleep=RecordingSleeper(),
    )

    document = json.loads(cache_path.read_text(encoding="utf-8"))
    assert document["books"]["dune-frank-herbert"]["source"] == "openlibrary"
    assert len(openlibrary.calls) == 1


def test_defaults_come_from_data_dir(isolated_environment: Path) -> None:
    isolated_environment.mkdir(parents=True)
    _write_list(isolated_environment / "videos.json", [{"title": "Yesterday", "artist": "Beatles"}])

    stats = fetch_media(
        VIDEOS,
        sources=[FakeSource("youtube", default="https://i.ytimg.com/y.jpg")],
        sleep=RecordingSleeper(),
    )

    document = json.loads((isolated_environment / "youtube-cache.json").read_text(encoding="utf-8"))
    assert document["videos"]["beatles-yesterday"]["thumbnailUrl"] == "https://i.ytimg.com/y.jpg"
    assert document["stats"]["withThumbnails"] == 1
    assert stats.percentage == 100


def test_bad_input_aborts_before_lookups(tmp_path: Path) -> None:
    source = FakeSource("wikimedia", default="https://x/y.jpg")
    cache_path = tmp_path / "cache.json"

    with pytest.raises(EntityListError):
        fetch_media(
            ARTWORKS,
            input_path=tmp_path / "missing.json",
            cache_path=cache_path,
            sources=[source],
            sleep=RecordingSleeper(),
        )

    assert source.calls == []
    assert not cache_path.exists()


def test_stats_count_records_left_from_earlier_lists(tmp_path: Path) -> None:
    input_path = _write_list(
        tmp_path / "artworks.json",
        [
            {"title": "Starry Night", "artist": "Van Gogh"},
            {"title": "Untitled", "artist": "Anonymous"},
        ],
    )
    cache_path = tmp_path / "artwork-cache.json"
    stale = {
        "day": 7,
        "title": "The Scream",
        "artist": "Munch",
        "imageUrl": "https://met/scream.jpg",
        "source": "met",
    }
    cache_path.write_text(
        json.dumps({"artworks": {"munch-the-scream": stale}}), encoding="utf-8"
    )

    stats = fetch_media(
        ARTWORKS,
        input_path=input_path,
        cache_path=cache_path,
        sources=[FakeSource("wikimedia", {"Starry Night": "https://commons/starry.jpg"})],
        sleep=RecordingSleeper(),
    )

    document = json.loads(cache_path.read_text(encoding="utf-8"))
    assert document["artworks"]["munch-the-scream"] == stale
    assert document["stats"]["total"] == 2
    assert document["stats"]["withImages"] == 2
    assert document["stats"]["withoutImages"] == 0
    assert document["stats"]["percentage"] == 100
    assert document["stats"]["failed"] == 1
    assert document["stats"]["sources"] == {"wikimedia": 1, "met": 1}
    assert stats.with_media == 2
