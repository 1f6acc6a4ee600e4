"""Open Library book search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Literal

from mediafetch.adapters.catalog import CatalogSource
from mediafetch.config.catalogs import OPENLIBRARY_COVERS_URL

from .schema import SearchResponse

if TYPE_CHECKING:
    from mediafetch.adapters.http_resilience import ResilientClient
    from mediafetch.domain.types import MediaQuery

CoverKey = Literal["id", "isbn"]

COVER_SIZE = "L"


def cover_url(key: CoverKey, value: str | int, *, base_url: str = OPENLIBRARY_COVERS_URL) -> str:
    return f"{base_url}/{key}/{value}-{COVER_SIZE}.jpg"


@dataclass(slots=True)
class OpenLibrarySource(CatalogSource):
    """Cover of the top search hit, by cover id or else by its first ISBN."""

    name: ClassVar[str] = "openlibrary"
    covers_base_url: str = OPENLIBRARY_COVERS_URL

    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None:
        payload = await self._get_json(
            client,
            "search.json",
            params={"q": f"{query.title} {query.creator}", "limit": 1},
        )
        docs = SearchResponse.model_validate(payload).docs
        if not docs:
            return None

        doc = docs[0]
        if doc.cover_i:
            return cover_url("id", doc.cover_i, base_url=self.covers_base_url)
        if doc.isbn:
            return cover_url("isbn", doc.isbn[0], base_url=self.covers_base_url)
        return None
