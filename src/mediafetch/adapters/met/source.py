"""Metropolitan Museum of Art collection search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from mediafetch.adapters.catalog import CatalogSource
from mediafetch.domain.matching import is_acceptable_match

from .schema import MetObject, ObjectSearchResponse

if TYPE_CHECKING:
    from mediafetch.adapters.http_resilience import ResilientClient
    from mediafetch.domain.types import MediaQuery

CANDIDATE_LIMIT = 3


@dataclass(slots=True)
class MetSource(CatalogSource):
    """Look up the first few objects with images and keep a title-checked one.

    There is no best-effort fallback: an unchecked Met object is more often wrong
    than the lower-ranked sources.
    """

    name: ClassVar[str] = "met"

    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None:
        payload = await self._get_json(
            client,
            "search",
            params={"hasImages": "true", "q": f"{query.creator} {query.title}"},
        )
        search = ObjectSearchResponse.model_validate(payload)

        for object_id in search.object_ids[:CANDIDATE_LIMIT]:
            detail = MetObject.model_validate(await self._get_json(client, f"objects/{object_id}"))
            if not detail.primary_image:
                continue
            if is_acceptable_match(detail.title, query.title):
                return detail.primary_image
        return None
