"""YouTube video search for thumbnails."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from mediafetch.adapters.catalog import CatalogAPIError, CatalogSource
from mediafetch.domain.matching import pick_largest

from .schema import SearchListResponse

if TYPE_CHECKING:
    from mediafetch.adapters.http_resilience import ResilientClient
    from mediafetch.config.youtube import YouTubeConfig
    from mediafetch.domain.types import MediaQuery

THUMBNAIL_SIZES = ("maxres", "standard", "high", "medium", "default")


@dataclass(slots=True)
class YouTubeSource(CatalogSource):
    """Thumbnail of the top video hit. Needs an API key; without one every lookup fails."""

    name: ClassVar[str] = "youtube"
    api_key: str | None = None

    @classmethod
    def from_config(cls, config: YouTubeConfig) -> YouTubeSource:
        return cls(resilience=config.resilience, api_key=config.api_key)

    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None:
        if not self.api_key:
            raise CatalogAPIError("no YouTube API key configured")

        payload = await self._get_json(
            client,
            "search",
            params={
                "part": "snippet",
                "maxResults": 1,
                "q": f"{query.creator} {query.title}",
                "type": "video",
                "key": self.api_key,
            },
        )
        items = SearchListResponse.model_validate(payload).items
        if not items:
            return None
        thumbnails = {size: thumb.url for size, thumb in items[0].snippet.thumbnails.items()}
        return pick_largest(thumbnails, THUMBNAIL_SIZES)
