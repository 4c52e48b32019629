"""
Root-level shared test fixtures.

Every test runs with the OTS_* environment cleared, the settings singleton
reset, and the user config directory pointed at a temp dir, so a developer's
real credentials and config file never leak into a test.
"""

from __future__ import annotations

import pytest

from ots.config import reset_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Remove OTS_* env vars and isolate the config directory."""
    for key in [
        "OTS_USERNAME",
        "OTS_KEY",
        "OTS_BASE_URL",
        "OTS_TIMEOUT",
        "OTS_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    reset_settings()
    yield
    reset_settings()
