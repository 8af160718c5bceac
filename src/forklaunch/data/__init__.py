"""Bundled forklaunch resources.

``config/`` holds the default configuration layer and ``schemas/`` the JSON
Schema documents (stored as YAML) it is validated against.
"""
from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict

import yaml

CONFIG_DIR = "config"
SCHEMAS_DIR = "schemas"


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Return the filesystem path of a bundled directory or file.

    Example:
        >>> get_data_path("config", "fork.yaml").name
        'fork.yaml'
    """
    base = Path(str(resources.files(__name__) / subpackage))
    return base / filename if filename else base


def defaults_dir() -> Path:
    """Directory holding the bundled default configuration layer."""
    return get_data_path(CONFIG_DIR)


def schema_path(name: str) -> Path:
    """Path of a bundled schema; ``.yaml`` is appended when no suffix is given."""
    if not name.lower().endswith((".yaml", ".yml")):
        name = f"{name}.yaml"
    return get_data_path(SCHEMAS_DIR, name)


@lru_cache(maxsize=8)
def read_schema(name: str) -> Dict[str, Any]:
    """Parse a bundled schema (cached per process).

    Raises:
        FileNotFoundError: If no such schema is bundled.
        ValueError: If the document is not a mapping.
    """
    path = schema_path(name)
    if not path.is_file():
        raise FileNotFoundError(f"Schema not found: {path.name}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(data).__name__}")
    return data


def clear_caches() -> None:
    read_schema.cache_clear()


__all__ = [
    "CONFIG_DIR",
    "SCHEMAS_DIR",
    "get_data_path",
    "defaults_dir",
    "schema_path",
    "read_schema",
    "clear_caches",
]
