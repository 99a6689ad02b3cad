"""Ensure project root is on sys.path for test imports."""

from __future__ import annotations

import locale
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flagline.config import reload_config  # noqa: E402


@pytest.fixture(autouse=True)
def _flagline_env_defaults(monkeypatch, tmp_path):
    """Keep colour, locale and config lookups independent of the developer machine."""

    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("FLAGLINE_CONFIG", raising=False)
    monkeypatch.delenv("FLAGLINE_DEBUG", raising=False)
    monkeypatch.setenv("FLAGLINE_CONFIG_HOME", str(tmp_path / "config-home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    numeric_locale = locale.setlocale(locale.LC_NUMERIC)
    reload_config()
    yield
    reload_config()
    locale.setlocale(locale.LC_NUMERIC, numeric_locale)
