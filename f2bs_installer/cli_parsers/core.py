"""Parser setup for installer commands."""

from __future__ import annotations

import argparse
from typing import Callable

from f2bs_installer.cli_parsers.types import CommandHandlers


def _add_config_flag(target: argparse.ArgumentParser) -> None:
    target.add_argument(
        "--config",
        help="Path to a YAML config file (default: $F2BS_INSTALL_CONFIG or ~/.config/f2bs-install/config.yaml)",
    )


def _add_preflight_parser(
    subparsers,
    add_json_flag: Callable[[argparse.ArgumentParser], None],
    handlers: CommandHandlers,
    name: str,
    help_text: str,
) -> None:
    parser = subparsers.add_parser(name, help=help_text)
    add_json_flag(parser)
    _add_config_flag(parser)
    parser.set_defaults(func=handlers.cmd_preflight)


def add_install_commands(
    subparsers,
    add_json_flag: Callable[[argparse.ArgumentParser], None],
    handlers: CommandHandlers,
) -> None:
    install = subparsers.add_parser("install", help="Download the latest release and install it (default)")
    add_json_flag(install)
    _add_config_flag(install)
    install.add_argument("--dest", help="Install into this directory instead of resolving one from PATH")
    install.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve the install directory and report it without downloading",
    )
    prompt = install.add_mutually_exclusive_group()
    prompt.add_argument(
        "--ask",
        dest="ask",
        action="store_true",
        default=None,
        help="Ask before escalating with sudo",
    )
    prompt.add_argument(
        "--yes",
        dest="ask",
        action="store_false",
        default=None,
        help="Never ask before escalating with sudo",
    )
    install.set_defaults(func=handlers.cmd_install)

    where = subparsers.add_parser("where", help="Print the directory an install would use")
    add_json_flag(where)
    where.set_defaults(func=handlers.cmd_where)

    _add_preflight_parser(subparsers, add_json_flag, handlers, "preflight", "Check install readiness")
    _add_preflight_parser(subparsers, add_json_flag, handlers, "doctor", "Alias for preflight")
