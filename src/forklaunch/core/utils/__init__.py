"""Shared utilities for forklaunch core modules."""
from __future__ import annotations

from .merge import deep_merge
from .paths import get_project_config_dir, get_user_config_dir, resolve_project_root
from .subprocess import run_command, spawn_detached

__all__ = [
    "deep_merge",
    "get_project_config_dir",
    "get_user_config_dir",
    "resolve_project_root",
    "run_command",
    "spawn_detached",
]
