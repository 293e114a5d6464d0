"""Release archive download and extraction."""

from __future__ import annotations

import hashlib
import stat
import tarfile
import urllib.request
import zipfile
from pathlib import Path, PurePosixPath

from f2bs_installer.errors import ArchiveError, ChecksumMismatch, MissingBinaryError
from f2bs_installer.release import USER_AGENT

CHUNK_SIZE = 8192


def download_file(url: str, dest: Path, timeout: int = 30) -> Path:
    dest.parent.mkdir(parents=True, exist_ok=True)
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})  # noqa: S310
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:  # noqa: S310
            with dest.open("wb") as handle:
                for chunk in iter(lambda: response.read(CHUNK_SIZE), b""):
                    handle.write(chunk)
    except OSError as exc:
        raise ArchiveError(f"Failed to download {url}: {exc}") from exc
    return dest


def sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_checksum(path: Path, expected: str) -> None:
    actual = sha256(path)
    if actual.lower() != expected.strip().lower():
        raise ChecksumMismatch(expected, actual)


def _pick_member(names: list[str], member_name: str) -> str | None:
    """Exact match first, then the shallowest entry with that basename."""
    if member_name in names:
        return member_name
    matches = [name for name in names if PurePosixPath(name).name == member_name]
    if not matches:
        return None
    return min(matches, key=lambda name: len(PurePosixPath(name).parts))


def _check_safe(name: str) -> None:
    path = PurePosixPath(name)
    if path.is_absolute() or ".." in path.parts:
        raise ArchiveError(f"Refusing unsafe archive member: {name}")


def _extract_zip(archive_path: Path, member_name: str, dest: Path) -> None:
    with zipfile.ZipFile(archive_path) as archive:
        names = [info.filename for info in archive.infolist() if not info.is_dir()]
        chosen = _pick_member(names, member_name)
        if chosen is None:
            raise MissingBinaryError(f"Archive did not contain {member_name} binary")
        _check_safe(chosen)
        with archive.open(chosen) as source, dest.open("wb") as target:
            for chunk in iter(lambda: source.read(CHUNK_SIZE), b""):
                target.write(chunk)


def _extract_tar(archive_path: Path, member_name: str, dest: Path) -> None:
    with tarfile.open(archive_path, "r:*") as archive:
        members = {member.name: member for member in archive.getmembers() if member.isfile()}
        chosen = _pick_member(list(members), member_name)
        if chosen is None:
            raise MissingBinaryError(f"Archive did not contain {member_name} binary")
        _check_safe(chosen)
        source = archive.extractfile(members[chosen])
        if source is None:
            raise MissingBinaryError(f"Archive did not contain {member_name} binary")
        with source, dest.open("wb") as target:
            for chunk in iter(lambda: source.read(CHUNK_SIZE), b""):
                target.write(chunk)


def extract_member(archive_path: Path, member_name: str, dest_dir: Path) -> Path:
    """Extract one regular file from a zip or tarball into ``dest_dir``.

    The file is written as ``dest_dir / member_name`` regardless of the
    directory it sits under inside the archive, and is marked executable.

    Raises:
        MissingBinaryError: If the archive has no such file.
        ArchiveError: If the archive is corrupt or the member path is unsafe.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    extracted = dest_dir / member_name
    try:
        if zipfile.is_zipfile(archive_path):
            _extract_zip(archive_path, member_name, extracted)
        elif tarfile.is_tarfile(archive_path):
            _extract_tar(archive_path, member_name, extracted)
        else:
            raise ArchiveError(f"Unsupported archive format: {archive_path.name}")
    except (zipfile.BadZipFile, tarfile.TarError, OSError) as exc:
        raise ArchiveError(f"Failed to extract {member_name}: {exc}") from exc
    extracted.chmod(extracted.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return extracted
