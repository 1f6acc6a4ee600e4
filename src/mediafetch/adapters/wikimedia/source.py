"""Wikimedia Commons file search."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

from mediafetch.adapters.catalog import CatalogSource

from .schema import ImageInfoResponse, SearchResponse

if TYPE_CHECKING:
    from mediafetch.adapters.http_resilience import ResilientClient
    from mediafetch.domain.types import MediaQuery

log = getLogger(__name__)

FILE_NAMESPACE = 6
SEARCH_LIMIT = 5
THUMB_WIDTH = 1280
_IMAGE_EXTENSIONS = (".jpg", ".png")


def build_search_term(query: MediaQuery) -> str:
    return f"{query.title} {query.creator} painting"


def is_usable_image_url(url: str | None) -> bool:
    if not url or not url.startswith("http"):
        return False
    lowered = url.lower()
    return any(extension in lowered for extension in _IMAGE_EXTENSIONS)


@dataclass(slots=True)
class WikimediaSource(CatalogSource):
    """Search the File: namespace and take the first hit that is a raster image.

    Commons titles are curated, so hits are not run through the title check.
    """

    name: ClassVar[str] = "wikimedia"

    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None:
        payload = await self._get_json(
            client,
            "api.php",
            params={
                "action": "query",
                "list": "search",
                "srsearch": build_search_term(query),
                "srnamespace": FILE_NAMESPACE,
                "srlimit": SEARCH_LIMIT,
                "format": "json",
                "origin": "*",
            },
        )
        search = SearchResponse.model_validate(payload)

        for hit in search.hits[:SEARCH_LIMIT]:
            url = await self._image_url(client, hit.title)
            if is_usable_image_url(url):
                return url
        return None

    async def _image_url(self, client: ResilientClient, page_title: str) -> str | None:
        payload = await self._get_json(
            client,
            "api.php",
            params={
                "action": "query",
                "titles": page_title,
                "prop": "imageinfo",
                "iiprop": "url",
                "iiurlwidth": THUMB_WIDTH,
                "format": "json",
                "origin": "*",
            },
        )
        page = ImageInfoResponse.model_validate(payload).first_page
        if page is None or not page.imageinfo:
            log.debug("wikimedia: no imageinfo for %s", page_title)
            return None
        info = page.imageinfo[0]
        return info.thumb_url or info.url
