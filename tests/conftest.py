from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))


@pytest.fixture
def fresh_settings(monkeypatch, tmp_path):
    """Isolate process-wide settings and override caches from the environment."""
    from ttc_headsigns.config import CONFIG_ENV, get_settings
    from ttc_headsigns.overrides import default_table

    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "agency.yaml"))
    get_settings.cache_clear()
    default_table.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
    default_table.cache_clear()
