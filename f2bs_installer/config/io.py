"""YAML and packaged-data loading for installer config."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Any

import yaml


# Keys whose scalars are kept exactly as written instead of YAML's int reading.
RAW_TEXT_KEYS = ("mode",)


def _raw_scalars(text: str, keys: tuple[str, ...]) -> dict[str, str]:
    node = yaml.compose(text, Loader=yaml.SafeLoader)
    raw: dict[str, str] = {}
    if not isinstance(node, yaml.MappingNode):
        return raw
    for key_node, value_node in node.value:
        if key_node.value in keys and isinstance(value_node, yaml.ScalarNode):
            raw[key_node.value] = value_node.value
    return raw


def _parse_yaml(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {source}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {source}, got {type(data).__name__}")
    # `mode: 0755` and `mode: 755` load as different ints; keep the digits.
    for key, value in _raw_scalars(text, RAW_TEXT_KEYS).items():
        if isinstance(data.get(key), int) and not isinstance(data.get(key), bool):
            data[key] = value
    return data


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from disk; a missing or empty file yields ``{}``."""
    if not path.exists():
        return {}
    return _parse_yaml(path.read_text(encoding="utf-8"), str(path))


def read_data_text(name: str) -> str:
    return resources.files("f2bs_installer").joinpath("data", name).read_text(encoding="utf-8")


def load_defaults() -> dict[str, Any]:
    return _parse_yaml(read_data_text("defaults.yaml"), "defaults.yaml")
