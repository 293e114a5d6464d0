"""Normalization helpers for installer config."""

from __future__ import annotations

import copy
import re
from typing import Any

from f2bs_installer.utils.env import _parse_env_bool


def normalize_config(config: dict[str, Any]) -> dict[str, Any]:
    """Coerce loosely-typed values (env strings, YAML octals) before validation."""
    if not isinstance(config, dict):
        return {}

    normalized = copy.deepcopy(config)

    mode = normalized.get("mode")
    # An int written with octal digits only (755) is read as octal text.
    if isinstance(mode, int) and not isinstance(mode, bool) and re.fullmatch(r"[0-7]{3,4}", str(mode)):
        normalized["mode"] = str(mode)

    timeout = normalized.get("timeout_seconds")
    if isinstance(timeout, str) and timeout.strip().isdigit():
        normalized["timeout_seconds"] = int(timeout.strip())

    ask = normalized.get("ask")
    if isinstance(ask, str):
        parsed = _parse_env_bool(ask)
        if parsed is not None:
            normalized["ask"] = parsed

    install_dir = normalized.get("install_dir")
    if isinstance(install_dir, str) and len(install_dir) > 1:
        normalized["install_dir"] = install_dir.rstrip("/") or "/"

    return normalized
