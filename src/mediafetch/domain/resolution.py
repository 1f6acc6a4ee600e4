"""Ordered fallback across media sources."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager, AsyncExitStack
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .matching import secure_url
from .types import MediaResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from .ports.sources import MediaSource
    from .types import MediaQuery, SourceTag

log = getLogger(__name__)


@dataclass(slots=True)
class ResolutionPipeline:
    """Try ``sources`` in order and keep the first hit.

    The order is a trust ranking: earlier sources are considered more accurate, so a
    later source is only consulted when every earlier one came back empty.

    Used as an async context manager, the pipeline enters every source that is itself
    one, so sources can hold their connections open for a whole batch.
    """

    sources: Sequence[MediaSource] = field(default_factory=tuple)
    _stack: AsyncExitStack | None = field(default=None, init=False, repr=False, compare=False)

    @property
    def source_names(self) -> tuple[SourceTag, ...]:
        return tuple(source.name for source in self.sources)

    async def __aenter__(self) -> ResolutionPipeline:
        async with AsyncExitStack() as stack:
            for source in self.sources:
                if isinstance(source, AbstractAsyncContextManager):
                    await stack.enter_async_context(source)
            self._stack = stack.pop_all()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        stack, self._stack = self._stack, None
        if stack is not None:
            await stack.aclose()

    async def resolve(self, query: MediaQuery) -> MediaResult | None:
        for source in self.sources:
            result = await source.resolve(query)
            if result is None:
                log.debug("%s: no result for %r", source.name, query.title)
                continue
            return MediaResult(url=secure_url(result.url), source=result.source)
        return None
