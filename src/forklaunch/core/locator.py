"""Fork executable discovery.

Candidates are checked in priority order: an explicit override always comes
first, then the well-known install locations for the environment. The first
candidate that exists on disk wins.

macOS has no candidate list: Fork is started by its registered application
name through ``open -a``.
"""
from __future__ import annotations

import logging
import ntpath
import os
from typing import Callable, List, Mapping, Optional

from .environment import ExecutionEnvironment
from .wsl.translator import PathTranslator, looks_like_windows_path

logger = logging.getLogger(__name__)

FORK_DIR = "Fork"
FORK_EXE = "Fork.exe"

WSL_FALLBACK_CANDIDATES = (
    "/mnt/c/Program Files/Fork/Fork.exe",
    "/mnt/c/Program Files (x86)/Fork/Fork.exe",
)


def _env_value(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = (environ.get(key) or "").strip()
    return value or None


def _local_app_data(environ: Mapping[str, str]) -> Optional[str]:
    local = _env_value(environ, "LOCALAPPDATA")
    if local:
        return local
    profile = _env_value(environ, "USERPROFILE")
    if profile:
        return ntpath.join(profile, "AppData", "Local")
    return None


def windows_default_candidates(environ: Mapping[str, str]) -> List[str]:
    """Default Fork install locations on native Windows.

    Unset environment variables contribute no candidate.
    """
    candidates: List[str] = []
    local = _local_app_data(environ)
    if local:
        candidates.append(ntpath.join(local, FORK_DIR, FORK_EXE))
        # Squirrel-style per-user installs keep the live build under current/
        candidates.append(ntpath.join(local, FORK_DIR, "current", FORK_EXE))
    for key in ("ProgramFiles", "ProgramFiles(x86)"):
        base = _env_value(environ, key)
        if base:
            candidates.append(ntpath.join(base, FORK_DIR, FORK_EXE))
    return candidates


def _dedupe(paths: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for p in paths:
        if p not in seen:
            seen.add(p)
            out.append(p)
    return out


def executable_candidates(
    env: ExecutionEnvironment,
    override: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    translator: Optional[PathTranslator] = None,
) -> List[str]:
    """Build the ordered candidate list for ``env``.

    Raises:
        TranslationError: When a Windows-style override cannot be translated
            into the WSL namespace.
    """
    env_vars = os.environ if environ is None else environ
    override = (override or "").strip() or None

    if env is ExecutionEnvironment.WINDOWS_NATIVE:
        candidates = [override] if override else []
        candidates.extend(windows_default_candidates(env_vars))
        return _dedupe(candidates)

    if env is ExecutionEnvironment.WINDOWS_WSL:
        candidates = []
        if override:
            if looks_like_windows_path(override):
                if translator is None:
                    raise ValueError("a translator is required for Windows-style overrides under WSL")
                logger.debug("override %s looks like a Windows path; translating", override)
                candidates.append(translator.to_wsl_path(override))
            else:
                candidates.append(override)
        candidates.extend(WSL_FALLBACK_CANDIDATES)
        return _dedupe(candidates)

    return []


def locate_executable(
    env: ExecutionEnvironment,
    override: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    exists: Callable[[str], bool] = os.path.exists,
    translator: Optional[PathTranslator] = None,
) -> Optional[str]:
    """Return the first candidate that exists, or None.

    This is an existence check only; execute permission is left to the
    spawn itself.
    """
    candidates = executable_candidates(env, override, environ=environ, translator=translator)
    for candidate in candidates:
        if exists(candidate):
            logger.debug("using Fork executable %s", candidate)
            return candidate
    logger.debug("no Fork executable among %s", candidates)
    return None


__all__ = [
    "WSL_FALLBACK_CANDIDATES",
    "windows_default_candidates",
    "executable_candidates",
    "locate_executable",
]
