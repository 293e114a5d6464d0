"""Download the latest f2bs release and install it onto PATH."""

from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path

from rich.console import Console

from f2bs_installer.archive import download_file, extract_member, verify_checksum
from f2bs_installer.commands._common import current_search_path, failure
from f2bs_installer.config import InstallerConfig, load_config
from f2bs_installer.errors import InstallerError
from f2bs_installer.exit_codes import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_SUCCESS, EXIT_USAGE
from f2bs_installer.privilege import install_binary, is_root, needs_escalation
from f2bs_installer.release import fetch_latest_release, find_asset_url, release_tag
from f2bs_installer.resolver import resolve_install_dir
from f2bs_installer.types import CommandResult


class InstallCancelled(Exception):
    """Raised when the user declines (or aborts) the sudo confirmation."""

    def __init__(self, message: str, interrupted: bool) -> None:
        super().__init__(message)
        self.interrupted = interrupted


def _target_dir(config: InstallerConfig, dest: str | None, root: bool) -> str:
    pinned = dest or config.install_dir
    if pinned:
        if not os.path.isdir(pinned):
            raise InstallerError(f"Install directory does not exist: {pinned}")
        return pinned
    return resolve_install_dir(current_search_path(), root)


def _confirm_escalation(dest_dir: str) -> None:
    import questionary  # type: ignore[import-untyped]

    answer = questionary.confirm(
        f"{dest_dir} is not writable. Install with sudo?",
        default=True,
    ).ask()
    if answer is None:
        raise InstallCancelled("Cancelled.", interrupted=True)
    if not answer:
        raise InstallCancelled("Installation cancelled", interrupted=False)


def _fetch_and_install(
    config: InstallerConfig,
    dest_dir: str,
    escalate: bool,
    ask: bool,
    console: Console | None,
) -> tuple[Path, str]:
    def status(message: str) -> None:
        if console is not None:
            console.print(message)

    status(f"Fetching latest release of [bold]{config.repo}[/bold]")
    release = fetch_latest_release(config.repo, timeout=config.timeout_seconds)
    tag = release_tag(release)
    asset_url = find_asset_url(release, config.asset_name)

    with tempfile.TemporaryDirectory(prefix="f2bs-install-") as tmp:
        tmp_dir = Path(tmp)
        status(f"Downloading {config.asset_name} ({tag})")
        archive_path = download_file(asset_url, tmp_dir / config.asset_name, timeout=config.timeout_seconds)
        if config.checksum:
            verify_checksum(archive_path, config.checksum)
        binary = extract_member(archive_path, config.binary_name, tmp_dir / "extract")

        if escalate:
            if ask:
                _confirm_escalation(dest_dir)
            status(f"{dest_dir} is not writable; using sudo")
        installed = install_binary(
            binary,
            dest_dir,
            config.binary_name,
            mode=config.mode,
            escalate=escalate,
        )
    return installed, tag


def cmd_install(args: argparse.Namespace) -> int | CommandResult:
    json_mode = getattr(args, "json", False)
    dry_run = bool(getattr(args, "dry_run", False))

    try:
        config = load_config(getattr(args, "config", None))
    except InstallerError as exc:
        return failure(exc, json_mode)

    ask_flag = getattr(args, "ask", None)
    ask = config.ask if ask_flag is None else bool(ask_flag)
    root = is_root()

    dest = getattr(args, "dest", None)
    if dest and not os.path.isdir(dest):
        return failure(InstallerError(f"--dest is not a directory: {dest}"), json_mode, EXIT_USAGE)

    try:
        dest_dir = _target_dir(config, dest, root)
    except InstallerError as exc:
        return failure(exc, json_mode)
    escalate = needs_escalation(dest_dir, root)
    target = str(Path(dest_dir) / config.binary_name)

    if dry_run:
        summary = f"Would install {target}"
        if json_mode:
            return CommandResult(
                exit_code=EXIT_SUCCESS,
                summary=summary,
                data={"install_dir": dest_dir, "path": target, "escalate": escalate, "root": root},
            )
        print(summary + (" (via sudo)" if escalate else ""))
        return EXIT_SUCCESS

    console = None if json_mode else Console(stderr=True, highlight=False)
    try:
        installed, tag = _fetch_and_install(config, dest_dir, escalate, ask, console)
    except InstallCancelled as exc:
        exit_code = EXIT_INTERRUPTED if exc.interrupted else EXIT_FAILURE
        if json_mode:
            return CommandResult(exit_code=exit_code, summary=str(exc))
        print(str(exc))
        return exit_code
    except InstallerError as exc:
        return failure(exc, json_mode)

    summary = f"Installed {installed}"
    if json_mode:
        return CommandResult(
            exit_code=EXIT_SUCCESS,
            summary=summary,
            files_generated=[str(installed)],
            data={"install_dir": dest_dir, "path": str(installed), "release": tag, "escalate": escalate},
        )
    print(summary)
    return EXIT_SUCCESS
