"""YAML and JSON readers with consistent error handling."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List

import json5
import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns ``default`` if the file is missing or invalid, unless
    ``raise_on_error`` is True.

    Examples:
        >>> config = read_yaml(Path("config.yaml"), default={})
        >>> assert isinstance(config, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def read_jsonc(path: Path, default: Any = None) -> Any:
    """Read a JSON-with-comments document (VS Code style).

    ``//`` and ``/* */`` comments and trailing commas are accepted. Returns
    ``default`` when the file is missing.

    Raises:
        ValueError: When the content does not parse.
        OSError: When the path exists but cannot be read.
    """
    path = Path(path)
    if not path.exists():
        return default
    return json5.loads(path.read_text(encoding="utf-8"))


def iter_yaml_files(directory: Path) -> List[Path]:
    """Return ``*.yaml``/``*.yml`` files in ``directory`` in alphabetical order."""
    if not directory.is_dir():
        return []
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix in {".yaml", ".yml"}]
    return sorted(files, key=lambda p: p.name)


__all__ = ["read_yaml", "read_jsonc", "iter_yaml_files"]
