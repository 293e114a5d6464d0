"""Placing the binary, with optional sudo escalation."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

from f2bs_installer.errors import PrivilegeError
from f2bs_installer.resolver import FileSystem, OsFileSystem
from f2bs_installer.utils.exec_utils import command_exists, resolve_executable

DEFAULT_MODE = 0o755


def is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def needs_escalation(dest_dir: str, root: bool, fs: FileSystem | None = None) -> bool:
    if root:
        return False
    fs = fs or OsFileSystem()
    return not fs.is_writable(dest_dir)


def sudo_install_command(source: Path, dest: Path, mode: int = DEFAULT_MODE) -> list[str]:
    return [
        resolve_executable("sudo"),
        "install",
        "-m",
        f"{mode:04o}",
        str(source),
        str(dest),
    ]


def _copy_in_place(source: Path, dest: Path, mode: int) -> None:
    # Stage next to the destination so the final rename stays on one filesystem.
    fd, staged_name = tempfile.mkstemp(prefix=f".{dest.name}.", dir=str(dest.parent))
    staged = Path(staged_name)
    try:
        with os.fdopen(fd, "wb") as target, source.open("rb") as src:
            shutil.copyfileobj(src, target)
        staged.chmod(mode)
        os.replace(staged, dest)
    except OSError:
        staged.unlink(missing_ok=True)
        raise


def install_binary(
    source: Path,
    dest_dir: str | Path,
    name: str,
    mode: int = DEFAULT_MODE,
    escalate: bool = False,
) -> Path:
    """Install ``source`` as ``dest_dir/name`` with ``mode``.

    Args:
        source: Extracted binary.
        dest_dir: Target directory, normally from ``resolve_install_dir``.
        name: Installed file name.
        mode: Permission bits for the installed file.
        escalate: Run ``sudo install`` instead of copying directly.

    Returns:
        Path of the installed binary.

    Raises:
        PrivilegeError: If the copy fails or sudo is unavailable or rejects us.
    """
    dest = Path(dest_dir) / name
    if not escalate:
        try:
            _copy_in_place(source, dest, mode)
        except OSError as exc:
            raise PrivilegeError(f"Failed to install {dest}: {exc}") from exc
        return dest

    if not command_exists("sudo"):
        raise PrivilegeError(f"{dest_dir} is not writable and sudo is not available")
    proc = subprocess.run(  # noqa: S603
        sudo_install_command(source, dest, mode),
        capture_output=True,
        text=True,
    )
    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        detail = f": {stderr}" if stderr else ""
        raise PrivilegeError(f"sudo install into {dest_dir} failed{detail}", stderr=stderr)
    return dest
