"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs within one process. The key includes the project root, the
``FORKLAUNCH_*`` environment and the mtimes of user/project YAML files, so a
changed override or config file is never served stale.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from forklaunch.core.utils.io import iter_yaml_files
from forklaunch.core.utils.paths import (
    get_project_config_dir,
    get_user_config_dir,
    resolve_project_root,
)

_config_cache: Dict[str, Dict[str, Any]] = {}


def _fingerprint_dir(d: Path) -> list[tuple[str, int, int]]:
    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(d):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path, environ: Mapping[str, str]) -> str:
    env_items = sorted((k, environ.get(k, "")) for k in environ.keys() if k.startswith("FORKLAUNCH_"))
    user_dir = get_user_config_dir(environ) / "config"
    project_dir = get_project_config_dir(repo_root) / "config"
    material = repr((env_items, _fingerprint_dir(user_dir), _fingerprint_dir(project_dir)))
    fp = hashlib.sha256(material.encode("utf-8")).hexdigest()[:16]
    return f"{repo_root}:{fp}"


def get_cached_config(
    repo_root: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    validate: bool = True,
) -> Dict[str, Any]:
    """Return the merged configuration, loading it on first use."""
    from .manager import ConfigManager

    env = os.environ if environ is None else environ
    root = resolve_project_root(repo_root)
    key = f"{_cache_key(root, env)}:{int(validate)}"
    cached = _config_cache.get(key)
    if cached is None:
        cached = ConfigManager(root, environ=env).load_config(validate=validate)
        _config_cache[key] = cached
    return cached


def clear_all_caches() -> None:
    """Clear cached configuration (tests, long-running hosts)."""
    _config_cache.clear()


__all__ = ["get_cached_config", "clear_all_caches"]
