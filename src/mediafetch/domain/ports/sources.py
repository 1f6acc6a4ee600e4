"""Ports for looking up media in external catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mediafetch.domain.types import MediaQuery, MediaResult, SourceTag


@runtime_checkable
class MediaSource(Protocol):
    """One catalog able to resolve a query to a media URL.

    Implementations must not raise for expected failures (network errors, bad
    payloads, no hits); they return ``None`` instead so the next source can be tried.
    """

    @property
    def name(self) -> SourceTag: ...

    async def resolve(self, query: MediaQuery) -> MediaResult | None: ...


__all__ = ["MediaSource"]
