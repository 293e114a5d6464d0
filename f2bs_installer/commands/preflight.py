"""Preflight checks for install readiness."""

from __future__ import annotations

import argparse
import os
import platform
import sys
from typing import Any

from f2bs_installer.commands._common import current_search_path
from f2bs_installer.config import InstallerConfig, load_config
from f2bs_installer.errors import ConfigValidationError, NoWritableInstallDirectory
from f2bs_installer.exit_codes import EXIT_FAILURE, EXIT_SUCCESS
from f2bs_installer.privilege import is_root, needs_escalation
from f2bs_installer.resolver import resolve_install_dir
from f2bs_installer.types import CommandResult
from f2bs_installer.utils.exec_utils import command_exists, resolve_executable

SUPPORTED_PLATFORMS = {("linux", "x86_64"), ("linux", "amd64")}


def _add_check(
    checks: list[dict[str, Any]],
    name: str,
    ok: bool,
    required: bool,
    detail: str,
    hint: str | None = None,
) -> None:
    status = "ok" if ok else ("fail" if required else "warn")
    entry = {
        "name": name,
        "status": status,
        "required": required,
        "detail": detail,
    }
    if hint:
        entry["hint"] = hint
    checks.append(entry)


def _check_python_version(checks: list[dict[str, Any]]) -> None:
    min_version = (3, 10)
    current = sys.version_info
    ok = (current.major, current.minor) >= min_version
    detail = f"{current.major}.{current.minor}.{current.micro}"
    hint = "Install Python 3.10+" if not ok else None
    _add_check(checks, "python", ok, True, detail, hint)


def _check_platform(checks: list[dict[str, Any]]) -> None:
    system = platform.system().lower()
    machine = platform.machine().lower()
    ok = (system, machine) in SUPPORTED_PLATFORMS
    detail = f"{system}/{machine}"
    hint = "Release binaries are published for linux x86_64 only" if not ok else None
    _add_check(checks, "platform", ok, True, detail, hint)


def _check_config(checks: list[dict[str, Any]], config_path: str | None) -> InstallerConfig | None:
    try:
        config = load_config(config_path)
    except ConfigValidationError as exc:
        hint = exc.errors[0] if exc.errors else None
        _add_check(checks, "config", False, True, str(exc), hint)
        return None
    _add_check(checks, "config", True, True, config.source or "built-in defaults")
    return config


def _check_install_dir(checks: list[dict[str, Any]], root: bool, pinned: str | None) -> str | None:
    if pinned:
        ok = os.path.isdir(pinned)
        hint = f"Create {pinned} or unset install_dir" if not ok else None
        _add_check(checks, "install dir", ok, True, f"{pinned} (pinned)", hint)
        return pinned if ok else None
    try:
        install_dir = resolve_install_dir(current_search_path(), root)
    except NoWritableInstallDirectory as exc:
        _add_check(
            checks,
            "install dir",
            False,
            True,
            str(exc),
            "Add a writable directory such as /usr/local/bin to PATH, or run as root",
        )
        return None
    _add_check(checks, "install dir", True, True, install_dir)
    return install_dir


def _check_sudo(checks: list[dict[str, Any]], required: bool) -> None:
    ok = command_exists("sudo")
    detail = resolve_executable("sudo") if ok else "not found"
    hint = "Install sudo or rerun as root" if not ok else None
    _add_check(checks, "sudo", ok, required, detail, hint)


def cmd_preflight(args: argparse.Namespace) -> int | CommandResult:
    json_mode = getattr(args, "json", False)
    root = is_root()

    checks: list[dict[str, Any]] = []
    _check_python_version(checks)
    _check_platform(checks)
    config = _check_config(checks, getattr(args, "config", None))
    pinned = config.install_dir if config else None
    install_dir = _check_install_dir(checks, root, pinned)
    if not root:
        # Only a pinned, read-only install dir makes sudo mandatory.
        escalate = install_dir is not None and needs_escalation(install_dir, root)
        _check_sudo(checks, required=escalate)

    required_failures = [c for c in checks if c["required"] and c["status"] != "ok"]
    exit_code = EXIT_FAILURE if required_failures else EXIT_SUCCESS

    summary = f"{len(required_failures)} required checks failed" if required_failures else "Preflight OK"

    if json_mode:
        return CommandResult(
            exit_code=exit_code,
            summary=summary,
            data={"checks": checks, "root": root},
        )

    for check in checks:
        status = check["status"].upper()
        name = check["name"]
        detail = check["detail"]
        line = f"[{status}] {name}: {detail}"
        print(line)
        hint = check.get("hint")
        if hint:
            print(f"  -> {hint}")

    return exit_code
