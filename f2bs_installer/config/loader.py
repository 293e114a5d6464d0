"""
f2bs installer - Configuration Loader

Merges configuration from multiple sources with proper precedence:
  1. F2BS_* environment variables (highest priority)
  2. User config file (--config, $F2BS_INSTALL_CONFIG, or XDG location)
  3. Packaged defaults.yaml (lowest priority)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from f2bs_installer.config.io import load_defaults, load_yaml_file
from f2bs_installer.config.normalize import normalize_config
from f2bs_installer.config.schema import validate_config
from f2bs_installer.errors import ConfigValidationError
from f2bs_installer.utils.env import env_str

CONFIG_ENV = "F2BS_INSTALL_CONFIG"

ENV_KEYS: dict[str, str] = {
    "F2BS_REPO": "repo",
    "F2BS_ASSET_NAME": "asset_name",
    "F2BS_BINARY_NAME": "binary_name",
    "F2BS_INSTALL_DIR": "install_dir",
    "F2BS_CHECKSUM": "checksum",
    "F2BS_TIMEOUT": "timeout_seconds",
    "F2BS_ASK": "ask",
}


@dataclass(frozen=True)
class InstallerConfig:
    repo: str
    asset_name: str
    binary_name: str
    install_dir: str | None
    checksum: str | None
    timeout_seconds: int
    mode: int
    ask: bool
    source: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> InstallerConfig:
        return cls(
            repo=data["repo"],
            asset_name=data["asset_name"],
            binary_name=data["binary_name"],
            install_dir=data.get("install_dir"),
            checksum=data.get("checksum"),
            timeout_seconds=int(data["timeout_seconds"]),
            mode=int(str(data["mode"]), 8),
            ask=bool(data.get("ask", False)),
            source=source,
        )


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    source = os.environ if environ is None else environ
    base = env_str("XDG_CONFIG_HOME", source)
    root = Path(base) if base else Path(os.path.expanduser("~")) / ".config"
    return root / "f2bs-install" / "config.yaml"


def find_config_file(
    explicit: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Locate the user config file, or None when there is none to read.

    An explicitly named file (argument or env var) must exist; the XDG
    default is only used when present.
    """
    source = os.environ if environ is None else environ
    named = explicit or env_str(CONFIG_ENV, source)
    if named:
        path = Path(named).expanduser()
        if not path.is_file():
            raise ConfigValidationError(f"Config file not found: {path}")
        return path
    default = default_config_path(source)
    return default if default.is_file() else None


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    source = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for env_name, key in ENV_KEYS.items():
        value = env_str(env_name, source)
        if value is not None:
            overrides[key] = value
    return overrides


def load_config(
    config_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> InstallerConfig:
    """
    Load and merge installer configuration.

    Args:
        config_path: Optional explicit path to a YAML config file
        environ: Environment mapping; defaults to os.environ

    Returns:
        Validated InstallerConfig

    Raises:
        ConfigValidationError: If a file is unreadable or the merge is invalid
    """
    merged = load_defaults()

    path = find_config_file(config_path, environ)
    if path is not None:
        try:
            merged.update(load_yaml_file(path))
        except ValueError as exc:
            raise ConfigValidationError(str(exc)) from exc
        except OSError as exc:
            raise ConfigValidationError(f"Cannot read {path}: {exc}") from exc

    merged.update(env_overrides(environ))
    merged = normalize_config(merged)

    errors = validate_config(merged)
    if errors:
        source = str(path) if path else "defaults/environment"
        raise ConfigValidationError(f"Config validation failed for {source}", errors)
    return InstallerConfig.from_dict(merged, source=str(path) if path else None)
