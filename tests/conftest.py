from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_ENV_VARS = (
    "MEDIAFETCH_HTTP_CACHE",
    "MEDIAFETCH_USER_AGENT",
    "YOUTUBE_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the data directory at a temp dir and hide any developer settings."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    data_dir = tmp_path / "mediafetch-data"
    monkeypatch.setenv("MEDIAFETCH_DATA_DIR", str(data_dir))
    return data_dir
