"""Install target resolution.

Picks the directory on the executable search path that the binary will be
installed into. Filesystem queries go through an injectable capability so
callers (and tests) can describe any permission layout without touching disk.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from typing import Protocol

from f2bs_installer.errors import NoWritableInstallDirectory

PREFERRED_DIRS: tuple[str, ...] = ("/usr/local/bin", "/usr/bin", "/bin")


class FileSystem(Protocol):
    def is_dir(self, path: str) -> bool: ...

    def is_writable(self, path: str) -> bool: ...


class OsFileSystem:
    """FileSystem backed by the running OS."""

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_writable(self, path: str) -> bool:
        return os.access(path, os.W_OK | os.X_OK)


def split_search_path(value: str | None) -> list[str]:
    """Split a colon-delimited PATH value, keeping order and empty entries."""
    if not value:
        return []
    return value.split(os.pathsep)


def _normalize(path: str) -> str:
    if not path:
        return path
    normalized = os.path.normpath(path)
    # normpath keeps a leading "//" on POSIX; it names the same root.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def is_under_home(path: str, home: str) -> bool:
    """True when ``path`` is ``home`` itself or one of its descendants."""
    home = _normalize(home)
    if not home or home == "/":
        return False
    path = _normalize(path)
    return path == home or path.startswith(home + "/")


def _eligible(path: str, is_root: bool, fs: FileSystem) -> bool:
    if not fs.is_dir(path):
        return False
    return is_root or fs.is_writable(path)


def _unique(entries: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for entry in entries:
        normalized = _normalize(entry)
        if normalized in seen:
            continue
        seen.add(normalized)
        ordered.append(normalized)
    return ordered


def resolve_install_dir(
    search_path: Sequence[str],
    is_root: bool,
    fs: FileSystem | None = None,
    home: str | None = None,
    preferred: Sequence[str] = PREFERRED_DIRS,
) -> str:
    """Return the directory the binary should be installed into.

    Args:
        search_path: Ordered directories, highest priority first.
        is_root: Whether the invoking process runs as the superuser.
        fs: Filesystem capability; defaults to the real OS.
        home: Home directory of the invoking user; defaults to ``~``.
        preferred: Conventional system directories tried before the fallback.

    Returns:
        The first preferred directory present on the search path that exists
        and is writable (or any existing one when root); otherwise the first
        non-home, absolute, existing, writable entry of the search path.

    Raises:
        NoWritableInstallDirectory: If neither pass finds a candidate.
    """
    fs = fs or OsFileSystem()
    if home is None:
        home = os.path.expanduser("~")

    entries = _unique(search_path)
    on_path = set(entries)

    for candidate in preferred:
        candidate = _normalize(candidate)
        if candidate in on_path and _eligible(candidate, is_root, fs):
            return candidate

    for entry in entries:
        if not entry or not os.path.isabs(entry):
            continue
        if is_under_home(entry, home):
            continue
        if _eligible(entry, is_root, fs):
            return entry

    raise NoWritableInstallDirectory()
