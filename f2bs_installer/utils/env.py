"""Environment helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping


def _parse_env_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    text = value.strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    return None


def env_str(name: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Return a stripped env value, treating empty strings as unset."""
    source = os.environ if environ is None else environ
    value = source.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None
