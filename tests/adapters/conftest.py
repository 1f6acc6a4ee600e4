"""Shared fixtures for catalog adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mediafetch.config.catalogs import HttpSettings, get_catalog_resilience
from mediafetch.domain.types import MediaQuery

if TYPE_CHECKING:
    from collections.abc import Callable

    from mediafetch.adapters.http_resilience import ResilienceConfig


@pytest.fixture
def http_settings() -> HttpSettings:
    return HttpSettings(user_agent="mediafetch-tests")


@pytest.fixture
def resilience_for(http_settings: HttpSettings) -> Callable[[str], ResilienceConfig]:
    def build(name: str) -> ResilienceConfig:
        return get_catalog_resilience(name, settings=http_settings)

    return build


@pytest.fixture
def starry_night() -> MediaQuery:
    return MediaQuery(title="Starry Night", creator="Van Gogh")


@pytest.fixture
def nineteen_eighty_four() -> MediaQuery:
    return MediaQuery(title="1984", creator="George Orwell")
