"""Shared utility functions for f2bs_installer."""

from __future__ import annotations

from f2bs_installer.utils.env import _parse_env_bool, env_str
from f2bs_installer.utils.exec_utils import command_exists, resolve_executable

__all__ = [
    "_parse_env_bool",
    "command_exists",
    "env_str",
    "resolve_executable",
]
