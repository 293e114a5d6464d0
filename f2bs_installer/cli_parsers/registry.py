"""Registry for CLI parser groups."""

from __future__ import annotations

import argparse
from typing import Callable

from f2bs_installer.cli_parsers.core import add_install_commands
from f2bs_installer.cli_parsers.types import CommandHandlers

ParserGroup = Callable[  # noqa: SLF001
    [argparse._SubParsersAction, Callable[[argparse.ArgumentParser], None], CommandHandlers],
    None,
]

PARSER_GROUPS: list[ParserGroup] = [
    add_install_commands,
]


def register_parser_groups(
    subparsers: argparse._SubParsersAction,  # noqa: SLF001
    add_json_flag: Callable[[argparse.ArgumentParser], None],
    handlers: CommandHandlers,
) -> None:
    for group in PARSER_GROUPS:
        group(subparsers, add_json_flag, handlers)
