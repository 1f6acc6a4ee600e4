"""Google Books volume search."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

import httpx

from mediafetch.adapters.catalog import CatalogSource
from mediafetch.domain.matching import pick_largest

from .schema import VolumesResponse

if TYPE_CHECKING:
    from mediafetch.adapters.http_resilience import ResilientClient
    from mediafetch.domain.types import MediaQuery

log = getLogger(__name__)

# largest first
IMAGE_SIZES = ("extra_large", "large", "medium", "small", "thumbnail", "small_thumbnail")


@dataclass(slots=True)
class GoogleBooksSource(CatalogSource):
    """Largest image link of the top volume.

    The anonymous quota is small; a 429 is treated as "no result" for this book
    rather than an error.
    """

    name: ClassVar[str] = "google"

    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None:
        response = await client.get(
            "volumes",
            params={"q": f"{query.title} {query.creator}", "maxResults": 1},
        )
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            log.warning("google: rate limit hit while looking up %r", query.title)
            return None
        response.raise_for_status()

        volumes = VolumesResponse.model_validate(response.json()).items
        if not volumes or volumes[0].volume_info.image_links is None:
            return None
        links = volumes[0].volume_info.image_links.model_dump()
        return pick_largest(links, IMAGE_SIZES)
