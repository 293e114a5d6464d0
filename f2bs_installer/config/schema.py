"""Schema loading and validation utilities for installer config."""

from __future__ import annotations

import json
from typing import Any

from jsonschema import Draft7Validator

from f2bs_installer.config.io import read_data_text


def get_schema() -> dict[str, Any]:
    """Load the packaged installer config schema."""
    data = json.loads(read_data_text("config.schema.json"))
    if not isinstance(data, dict):
        raise ValueError("config.schema.json is not a JSON object")
    return data


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate a config dict against the installer schema.

    Args:
        config: Configuration data to validate.

    Returns:
        Sorted list of validation error strings.
    """
    validator = Draft7Validator(get_schema())
    errors: list[str] = []
    for err in validator.iter_errors(config):
        path = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{path}: {err.message}")
    return sorted(errors)
