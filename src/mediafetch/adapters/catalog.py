"""Shared plumbing for catalog-backed media sources."""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Self

import httpx

from mediafetch.adapters.http_resilience import ResilienceConfig, ResilientClient
from mediafetch.config.catalogs import get_catalog_resilience
from mediafetch.domain.matching import secure_url
from mediafetch.domain.types import MediaResult

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from types import TracebackType

    from httpx._types import QueryParamTypes

    from mediafetch.domain.ports.sources import MediaSource
    from mediafetch.domain.types import MediaQuery

log = getLogger(__name__)

ClientFactory = Callable[[ResilienceConfig], ResilientClient]


class CatalogAPIError(RuntimeError):
    """Raised when a catalog answers with something we cannot use."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class CatalogSource(ABC):
    """Base class turning a catalog lookup into a never-raising ``MediaSource``.

    Subclasses implement :meth:`_lookup`, which may raise freely; :meth:`resolve`
    converts transport errors, bad statuses, undecodable or invalid payloads, HTTP
    cache database errors and :class:`CatalogAPIError` into ``None``.

    Inside ``async with source:`` every lookup shares one client, and with it the
    rate limiter and the HTTP cache. Outside of it each lookup opens its own client.
    """

    name: ClassVar[str]

    resilience: ResilienceConfig | None = None
    client_factory: ClientFactory = field(default=_default_client_factory)
    _client: ResilientClient | None = field(default=None, init=False, repr=False, compare=False)

    async def __aenter__(self) -> Self:
        if self._client is None:
            self._client = self.client_factory(self._config())
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def resolve(self, query: MediaQuery) -> MediaResult | None:
        try:
            async with self._session() as client:
                url = await self._lookup(client, query)
        except (httpx.HTTPError, ValueError, CatalogAPIError, sqlite3.Error) as exc:
            # pydantic.ValidationError and json.JSONDecodeError are ValueErrors
            log.warning("%s lookup failed for %r: %s", self.name, query.title, exc)
            return None
        if not url:
            return None
        return MediaResult(url=secure_url(url), source=self.name)

    @abstractmethod
    async def _lookup(self, client: ResilientClient, query: MediaQuery) -> str | None: ...

    def _config(self) -> ResilienceConfig:
        return self.resilience or get_catalog_resilience(self.name)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[ResilientClient]:
        if self._client is not None:
            yield self._client
            return
        async with self.client_factory(self._config()) as client:
            yield client

    async def _get_json(
        self,
        client: ResilientClient,
        path: str,
        params: QueryParamTypes | None = None,
    ) -> object:
        response = await client.get(path, params=params)
        response.raise_for_status()
        return response.json()


if TYPE_CHECKING:

    def _protocol_check(source: CatalogSource) -> MediaSource:
        return source
