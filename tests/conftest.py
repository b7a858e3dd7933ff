"""Pytest configuration for headless pygame tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch) -> Path:
    """Keep settings files out of the working directory."""
    from neonarena import settings, utils

    target = tmp_path / ".neonarena"
    monkeypatch.setattr(utils, "DATA_DIR", target)
    monkeypatch.setattr(settings, "SETTINGS_FILE", target / "settings.json")
    return target
