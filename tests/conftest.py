"""Shared fixtures for installer tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from f2bs_installer.config.loader import CONFIG_ENV, ENV_KEYS  # noqa: E402


class FakeFileSystem:
    """In-memory FileSystem: a set of directories and the writable subset."""

    def __init__(self, dirs=(), writable=()) -> None:
        self.dirs = set(dirs)
        self.writable = set(writable)
        self.calls: list[tuple[str, str]] = []

    def is_dir(self, path: str) -> bool:
        self.calls.append(("is_dir", path))
        return path in self.dirs

    def is_writable(self, path: str) -> bool:
        self.calls.append(("is_writable", path))
        return path in self.writable


@pytest.fixture
def clean_env(monkeypatch, tmp_path: Path) -> Path:
    """Strip F2BS_* settings and point HOME/XDG at empty temp dirs."""
    for name in [*ENV_KEYS, CONFIG_ENV]:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return tmp_path
