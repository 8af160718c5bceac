"""Configuration directory resolution.

User configuration lives in ``~/.forklaunch`` unless
``FORKLAUNCH_USER_CONFIG_DIR`` points elsewhere. Project configuration lives
in ``<project>/.forklaunch``.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_USER_CONFIG_PRIMARY = ".forklaunch"
DEFAULT_PROJECT_CONFIG_PRIMARY = ".forklaunch"
USER_CONFIG_DIR_ENV = "FORKLAUNCH_USER_CONFIG_DIR"


def get_user_config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the absolute user config directory.

    Relative values are treated as relative to the user's home directory
    (not CWD).
    """
    env = os.environ if environ is None else environ
    raw = (env.get(USER_CONFIG_DIR_ENV) or "").strip() or DEFAULT_USER_CONFIG_PRIMARY
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = Path.home() / p
    return p


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / DEFAULT_PROJECT_CONFIG_PRIMARY


def resolve_project_root(repo_root: Optional[Path | str] = None) -> Path:
    """Return ``repo_root`` when given, else the current working directory."""
    if repo_root is not None:
        return Path(repo_root).expanduser().resolve()
    return Path.cwd().resolve()


__all__ = [
    "DEFAULT_USER_CONFIG_PRIMARY",
    "DEFAULT_PROJECT_CONFIG_PRIMARY",
    "USER_CONFIG_DIR_ENV",
    "get_user_config_dir",
    "get_project_config_dir",
    "resolve_project_root",
]
