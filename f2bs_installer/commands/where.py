"""Report the directory an install would target."""

from __future__ import annotations

import argparse

from f2bs_installer.commands._common import current_search_path, failure
from f2bs_installer.errors import InstallerError
from f2bs_installer.exit_codes import EXIT_SUCCESS
from f2bs_installer.privilege import is_root, needs_escalation
from f2bs_installer.resolver import resolve_install_dir
from f2bs_installer.types import CommandResult


def cmd_where(args: argparse.Namespace) -> int | CommandResult:
    json_mode = getattr(args, "json", False)
    search_path = current_search_path()
    root = is_root()
    try:
        install_dir = resolve_install_dir(search_path, root)
    except InstallerError as exc:
        return failure(exc, json_mode)

    if json_mode:
        return CommandResult(
            exit_code=EXIT_SUCCESS,
            summary=install_dir,
            data={
                "install_dir": install_dir,
                "root": root,
                "escalate": needs_escalation(install_dir, root),
                "search_path": search_path,
            },
        )
    print(install_dir)
    return EXIT_SUCCESS
