"""Helpers shared by command handlers."""

from __future__ import annotations

import os
import sys

from f2bs_installer.errors import ConfigValidationError, InstallerError
from f2bs_installer.exit_codes import EXIT_FAILURE
from f2bs_installer.resolver import split_search_path
from f2bs_installer.types import CommandResult


def current_search_path() -> list[str]:
    return split_search_path(os.environ.get("PATH"))


def error_problems(exc: InstallerError) -> list[dict[str, str]]:
    problems = [{"severity": "error", "message": str(exc), "code": exc.code}]
    if isinstance(exc, ConfigValidationError):
        for detail in exc.errors:
            problems.append({"severity": "error", "message": detail, "code": exc.code})
    return problems


def failure(exc: InstallerError, json_mode: bool, exit_code: int = EXIT_FAILURE) -> int | CommandResult:
    if json_mode:
        return CommandResult(exit_code=exit_code, summary=str(exc), problems=error_problems(exc))
    print(str(exc), file=sys.stderr)
    if isinstance(exc, ConfigValidationError):
        for detail in exc.errors:
            print(f"  - {detail}", file=sys.stderr)
    return exit_code
