"""Config management module for the f2bs installer."""

from __future__ import annotations

from f2bs_installer.config.io import load_defaults, load_yaml_file
from f2bs_installer.config.loader import InstallerConfig, find_config_file, load_config
from f2bs_installer.config.normalize import normalize_config
from f2bs_installer.config.schema import get_schema, validate_config

__all__ = [
    "InstallerConfig",
    "find_config_file",
    "get_schema",
    "load_config",
    "load_defaults",
    "load_yaml_file",
    "normalize_config",
    "validate_config",
]
