from __future__ import annotations

import argparse
import json
import time

from f2bs_installer import __version__
from f2bs_installer.cli_parsers.registry import register_parser_groups
from f2bs_installer.cli_parsers.types import CommandHandlers
from f2bs_installer.exit_codes import EXIT_INTERNAL_ERROR, EXIT_SUCCESS
from f2bs_installer.types import CommandResult

DEFAULT_COMMAND = "install"


def cmd_install(args: argparse.Namespace) -> int | CommandResult:
    from f2bs_installer.commands.install import cmd_install as handler

    return handler(args)


def cmd_where(args: argparse.Namespace) -> int | CommandResult:
    from f2bs_installer.commands.where import cmd_where as handler

    return handler(args)


def cmd_preflight(args: argparse.Namespace) -> int | CommandResult:
    from f2bs_installer.commands.preflight import cmd_preflight as handler

    return handler(args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="f2bs-install",
        description="Install the latest f2bs release onto PATH",
    )
    parser.add_argument("--version", action="version", version=f"f2bs-install {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    def add_json_flag(target: argparse.ArgumentParser) -> None:
        target.add_argument(
            "--json",
            action="store_true",
            help="Output machine-readable JSON",
        )

    handlers = CommandHandlers(
        cmd_install=cmd_install,
        cmd_where=cmd_where,
        cmd_preflight=cmd_preflight,
    )
    register_parser_groups(subparsers, add_json_flag, handlers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        # No subcommand: behave like the shell installer and just install.
        args = parser.parse_args([DEFAULT_COMMAND])
    start = time.perf_counter()
    command = args.command

    try:
        result = args.func(args)
    except Exception as exc:  # noqa: BLE001 - surface in JSON mode
        if getattr(args, "json", False):
            problems = [
                {
                    "severity": "error",
                    "message": str(exc),
                    "code": "F2BS-UNHANDLED",
                }
            ]
            payload = CommandResult(
                exit_code=EXIT_INTERNAL_ERROR,
                summary=str(exc),
                problems=problems,
            ).to_payload(
                command,
                "error",
                int((time.perf_counter() - start) * 1000),
            )
            print(json.dumps(payload, indent=2))
            return EXIT_INTERNAL_ERROR
        raise

    if isinstance(result, CommandResult):
        exit_code = result.exit_code
        command_result = result
    else:
        exit_code = int(result)
        command_result = CommandResult(exit_code=exit_code)

    if not command_result.summary:
        command_result.summary = "OK" if exit_code == EXIT_SUCCESS else "Command failed"

    if getattr(args, "json", False):
        status = "success" if exit_code == EXIT_SUCCESS else "failure"
        payload = command_result.to_payload(
            command,
            status,
            int((time.perf_counter() - start) * 1000),
        )
        print(json.dumps(payload, indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
