"""Art Institute of Chicago artwork search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from mediafetch.adapters.catalog import CatalogSource
from mediafetch.config.catalogs import ARTIC_IIIF_URL
from mediafetch.domain.matching import is_acceptable_match

from .schema import ArtworkSearchResponse

if TYPE_CHECKING:
    from mediafetch.adapters.http_resilience import ResilientClient
    from mediafetch.domain.types import MediaQuery

    from .schema import Artwork

CANDIDATE_LIMIT = 3
IIIF_WIDTH = 843
SEARCH_FIELDS = "id,title,artist_display,image_id"


def iiif_image_url(image_id: str, *, base_url: str = ARTIC_IIIF_URL) -> str:
    return f"{base_url}/{image_id}/full/{IIIF_WIDTH},/0/default.jpg"


@dataclass(slots=True)
class ArticSource(CatalogSource):
    """Lowest-ranked artwork source.

    Prefers a title-checked hit but falls back to the top hit with an image, trading
    precision for coverage since nothing else is left to try.
    """

    name: ClassVar[str] = "aic"
    iiif_base_url: str = ARTIC_IIIF_URL

    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None:
        payload = await self._get_json(
            client,
            "artworks/search",
            params={
                "q": f"{query.creator} {query.title}",
                "limit": CANDIDATE_LIMIT,
                "fields": SEARCH_FIELDS,
            },
        )
        artworks = ArtworkSearchResponse.model_validate(payload).data[:CANDIDATE_LIMIT]
        if not artworks:
            return None

        chosen = self._first_match(artworks, query)
        if chosen is None and artworks[0].image_id:
            chosen = artworks[0]
        if chosen is None or chosen.image_id is None:
            return None
        return iiif_image_url(chosen.image_id, base_url=self.iiif_base_url)

    @staticmethod
    def _first_match(artworks: list[Artwork], query: MediaQuery) -> Artwork | None:
        for artwork in artworks:
            if artwork.image_id and is_acceptable_match(artwork.title, query.title):
                return artwork
        return None
