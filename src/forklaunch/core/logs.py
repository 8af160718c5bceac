from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_CONFIGURED_LOG_PATH: str | None = None
_FILE_HANDLER: logging.Handler | None = None
_STDERR_HANDLER: logging.Handler | None = None
_NULL_HANDLER: logging.Handler | None = None

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure stdlib logging to write to ``log_path``.

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER

    resolved = str(Path(log_path).expanduser().resolve())
    if _CONFIGURED_LOG_PATH == resolved and _FILE_HANDLER is not None:
        return

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(min(root.level or logging.WARNING, _level_from_name(level)))

    if _FILE_HANDLER is not None:
        root.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
        _FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(fh)

    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def configure_stderr_logging(level: str = "DEBUG") -> None:
    """Mirror log records to stderr (``--verbose``)."""
    global _STDERR_HANDLER

    root = logging.getLogger()
    if _STDERR_HANDLER is None:
        _STDERR_HANDLER = logging.StreamHandler(sys.stderr)
        _STDERR_HANDLER.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(_STDERR_HANDLER)
    _STDERR_HANDLER.setLevel(_level_from_name(level))
    root.setLevel(min(root.level or logging.WARNING, _level_from_name(level)))


def configure_logging(*, level: str, log_path: Optional[Path] = None, verbose: bool = False) -> None:
    """Apply the CLI logging setup in one call."""
    logging.getLogger("forklaunch").setLevel(_level_from_name("DEBUG" if verbose else level))
    if log_path is not None:
        configure_stdlib_logging(log_path=log_path, level=level)
    if verbose:
        configure_stderr_logging("DEBUG")
    else:
        suppress_lastresort()


def suppress_lastresort() -> None:
    """Keep stdlib logging's lastResort handler off stderr.

    Installs a NullHandler on the root logger when nothing else is attached,
    so the CLI's one-line result stays the only stderr output.
    """
    global _NULL_HANDLER

    root = logging.getLogger()
    if root.handlers or _NULL_HANDLER is not None:
        return
    _NULL_HANDLER = logging.NullHandler()
    root.addHandler(_NULL_HANDLER)


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: clear configured handlers."""
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER, _STDERR_HANDLER, _NULL_HANDLER
    root = logging.getLogger()
    for h in (_FILE_HANDLER, _STDERR_HANDLER, _NULL_HANDLER):
        if h is not None:
            root.removeHandler(h)
            h.close()
    _CONFIGURED_LOG_PATH = None
    _FILE_HANDLER = None
    _STDERR_HANDLER = None
    _NULL_HANDLER = None


__all__ = [
    "configure_stdlib_logging",
    "configure_stderr_logging",
    "configure_logging",
    "suppress_lastresort",
    "reset_stdlib_logging_for_tests",
]
