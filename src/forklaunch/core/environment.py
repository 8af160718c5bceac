"""Execution environment classification.

The launch target is always a native macOS or Windows application, so the
environment is decided by where Fork runs, not by where this process runs:
inside a WSL remote session the process sees a Linux platform but must start
a Windows binary.
"""
from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Mapping, Optional

DEFAULT_WSL_REMOTE_NAME = "wsl"
REMOTE_NAME_ENV = "FORKLAUNCH_REMOTE_NAME"


class ExecutionEnvironment(str, Enum):
    MACOS = "macos"
    WINDOWS_NATIVE = "windows"
    WINDOWS_WSL = "wsl"
    UNSUPPORTED = "unsupported"


def detect_environment(
    platform: str,
    remote_name: Optional[str] = None,
    *,
    wsl_remote_name: str = DEFAULT_WSL_REMOTE_NAME,
) -> ExecutionEnvironment:
    """Classify the execution context.

    Args:
        platform: Process platform identifier (``sys.platform`` values)
        remote_name: Active remote-session name, if any
        wsl_remote_name: Remote name that identifies a WSL session

    Returns:
        The matching :class:`ExecutionEnvironment`
    """
    if remote_name is not None and remote_name == wsl_remote_name:
        return ExecutionEnvironment.WINDOWS_WSL
    if platform == "darwin":
        return ExecutionEnvironment.MACOS
    if platform == "win32":
        return ExecutionEnvironment.WINDOWS_NATIVE
    return ExecutionEnvironment.UNSUPPORTED


def current_remote_name(
    environ: Optional[Mapping[str, str]] = None,
    *,
    wsl_remote_name: str = DEFAULT_WSL_REMOTE_NAME,
) -> Optional[str]:
    """Derive the remote-session name for a standalone process.

    An explicit ``FORKLAUNCH_REMOTE_NAME`` wins. Otherwise a WSL distro shell
    (``WSL_DISTRO_NAME`` is set) counts as the WSL remote.
    """
    env = os.environ if environ is None else environ
    explicit = (env.get(REMOTE_NAME_ENV) or "").strip()
    if explicit:
        return explicit
    if (env.get("WSL_DISTRO_NAME") or "").strip():
        return wsl_remote_name
    return None


def current_environment(
    environ: Optional[Mapping[str, str]] = None,
    *,
    wsl_remote_name: str = DEFAULT_WSL_REMOTE_NAME,
) -> ExecutionEnvironment:
    return detect_environment(
        sys.platform,
        current_remote_name(environ, wsl_remote_name=wsl_remote_name),
        wsl_remote_name=wsl_remote_name,
    )


__all__ = [
    "DEFAULT_WSL_REMOTE_NAME",
    "REMOTE_NAME_ENV",
    "ExecutionEnvironment",
    "detect_environment",
    "current_remote_name",
    "current_environment",
]
