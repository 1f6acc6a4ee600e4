"""Heuristics shared by the catalog sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def is_acceptable_match(candidate_title: str | None, queried_title: str) -> bool:
    """Return whether a catalog hit plausibly describes the queried work.

    Only the first word of the queried title is checked, case-insensitively, against
    the candidate title. False positives are accepted; the check exists to reject
    hits for clearly unrelated works.
    """

    if candidate_title is None:
        return False
    tokens = queried_title.lower().split()
    if not tokens:
        return True
    return tokens[0] in candidate_title.lower()


def secure_url(url: str) -> str:
    """Rewrite an ``http:`` URL to ``https:``; other URLs are returned unchanged."""

    if url[:5].lower() == "http:":
        return "https:" + url[5:]
    return url


def pick_largest(renditions: Mapping[str, str | None], sizes: Iterable[str]) -> str | None:
    """Return the first non-empty rendition, with ``sizes`` listed largest first."""

    for size in sizes:
        url = renditions.get(size)
        if url:
            return url
    return None
