"""Shared pytest fixtures for slashhook tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    env_path = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(env_path))
    for key in list(os.environ):
        if key.startswith("SLASHHOOK_"):
            monkeypatch.delenv(key)
    return env_path


@pytest.fixture()
def env_path(_isolate_env: Path) -> Path:
    return _isolate_env
