"""Loader for the input list of entities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

from mediafetch.domain.types import Entity

if TYPE_CHECKING:
    from pathlib import Path

    from mediafetch.config.families import RecordLayout


class EntityListError(RuntimeError):
    """Raised when the input list cannot be read; nothing can be processed."""


def load_entities(path: Path, layout: RecordLayout) -> list[Entity]:
    """Read ``[{"title": ..., "<creator field>": ...}, ...]`` from ``path``.

    The position in the list becomes the entity index. Any unreadable file or entry
    aborts the load.
    """

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise EntityListError(f"Cannot read entity list {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise EntityListError(f"Entity list {path} must be a JSON array")

    entities: list[Entity] = []
    for index, item in enumerate(cast(list[object], raw)):
        if not isinstance(item, Mapping):
            raise EntityListError(f"Entry {index} in {path} is not an object")
        data = cast(Mapping[str, object], item)
        title = data.get("title")
        creator = data.get(layout.creator_field)
        if not isinstance(title, str) or not isinstance(creator, str):
            raise EntityListError(
                f"Entry {index} in {path} needs string 'title' and '{layout.creator_field}'"
            )
        entities.append(Entity(title=title, creator=creator, index=index))
    return entities
