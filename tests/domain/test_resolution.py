from __future__ import annotations

import asyncio

import pytest

from mediafetch.domain.resolution import ResolutionPipeline
from mediafetch.domain.types import MediaQuery
from tests.helpers.sources import FakeSource, SessionFakeSource

QUERY = MediaQuery(title="Starry Night", creator="Van Gogh")


def test_first_source_with_a_result_wins() -> None:
    first = FakeSource("wikimedia", default="https://a/1.jpg")
    second = FakeSource("met", default="https://a/2.jpg")
    pipeline = ResolutionPipeline(sources=(first, second))

    result = asyncio.run(pipeline.resolve(QUERY))

    assert result is not None
    assert result.source == "wikimedia"
    assert second.calls == []


def test_falls_through_to_lower_priority_sources() -> None:
    first = FakeSource("wikimedia")
    second = FakeSource("met")
    third = FakeSource("aic", default="https://a/3.jpg")
    pipeline = ResolutionPipeline(sources=(first, second, third))

    result = asyncio.run(pipeline.resolve(QUERY))

    assert result is not None
    assert result.source == "aic"
    assert len(first.calls) == len(second.calls) == len(third.calls) == 1


def test_returns_none_when_every_source_is_empty() -> None:
    sources = (FakeSource("openlibrary"), FakeSource("google"))
    pipeline = ResolutionPipeline(sources=sources)

    assert asyncio.run(pipeline.resolve(QUERY)) is None
    assert all(len(source.calls) == 1 for source in sources)


def test_result_url_is_rewritten_to_https() -> None:
    pipeline = ResolutionPipeline(sources=(FakeSource("wikimedia", default="http://a/x.jpg"),))

    result = asyncio.run(pipeline.resolve(QUERY))

    assert result is not None
    assert result.url == "https://a/x.jpg"


def test_source_names_follow_priority_order() -> None:
    pipeline = ResolutionPipeline(sources=(FakeSource("openlibrary"), FakeSource("google")))

    assert pipeline.source_names == ("openlibrary", "google")
    assert ResolutionPipeline().source_names == ()


def test_pipeline_session_opens_and_closes_sources() -> None:
    events: list[str] = []
    first = SessionFakeSource("wikimedia", events=events)
    second = SessionFakeSource("met", default="https://a/2.jpg", events=events)
    plain = FakeSource("aic")
    pipeline = ResolutionPipeline(sources=(first, second, plain))

    async def scenario() -> None:
        async with pipeline:
            await pipeline.resolve(QUERY)
            await pipeline.resolve(QUERY)

    asyncio.run(scenario())

    assert events == [
        "open wikimedia",
        "open met",
        "resolve wikimedia",
        "resolve met",
        "resolve wikimedia",
        "resolve met",
        "close met",
        "close wikimedia",
    ]


def test_pipeline_session_closes_opened_sources_when_one_fails_to_open() -> None:
    events: list[str] = []

    class BrokenSource(SessionFakeSource):
        async def __aenter__(self) -> SessionFakeSource:
            raise RuntimeError("bad cache database path")

    first = SessionFakeSource("wikimedia", events=events)
    pipeline = ResolutionPipeline(sources=(first, BrokenSource("met", events=events)))

    async def scenario() -> None:
        async with pipeline:
            pass

    with pytest.raises(RuntimeError, match="bad cache"):
        asyncio.run(scenario())

    assert events == ["open wikimedia", "close wikimedia"]
