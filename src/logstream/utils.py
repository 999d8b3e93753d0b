from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml


def expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: expand_env(val) for key, val in value.items()}
    return value


def load_yaml_text(text: str) -> Dict[str, Any]:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a mapping")
    return data


def load_yaml_file(path: Path, *, expand: bool = True) -> Dict[str, Any]:
    """Read a YAML mapping from ``path``, expanding ``$VARS`` in string values."""
    with path.open("r", encoding="utf-8") as handle:
        data = load_yaml_text(handle.read())
    return expand_env(data) if expand else data
