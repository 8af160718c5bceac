"""Start Fork at a directory without waiting for it.

macOS goes through ``open -a`` as a single shell command, so the directory is
escaped for a double-quoted shell word. Windows and WSL start the executable
directly with an argv list; no shell sees the path and nothing is escaped.
"""
from __future__ import annotations

import logging
import subprocess
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .environment import ExecutionEnvironment
from .errors import LaunchError
from .outcome import LaunchRequest
from .utils.subprocess import spawn_detached

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "Fork"

Spawner = Callable[..., "subprocess.Popen[Any]"]
ErrorCallback = Callable[[str], None]

_SHELL_DQUOTE_SPECIAL = ("\\", '"', "$", "`")


def shell_quote_double(value: str) -> str:
    """Escape ``value`` for use inside a double-quoted POSIX shell word."""
    for ch in _SHELL_DQUOTE_SPECIAL:
        value = value.replace(ch, "\\" + ch)
    return value


def build_macos_command(directory: str, app_name: str = DEFAULT_APP_NAME) -> str:
    return f'open -a "{shell_quote_double(app_name)}" "{shell_quote_double(directory)}"'


def build_direct_argv(executable: str, directory: str) -> List[str]:
    return [executable, directory]


@dataclass
class LaunchHandle:
    """A started launch.

    ``watcher`` is set only when the spawned helper's exit status is
    meaningful (``open`` on macOS); errors it observes land in ``errors``.
    """

    process: "subprocess.Popen[Any]"
    watcher: Optional[threading.Thread] = None
    errors: List[str] = field(default_factory=list)

    def join(self, timeout: Optional[float] = None) -> List[str]:
        """Wait up to ``timeout`` for the watcher and return observed errors."""
        if self.watcher is not None:
            self.watcher.join(timeout)
        return list(self.errors)


def _watch_helper(handle: LaunchHandle, on_error: Optional[ErrorCallback]) -> None:
    proc = handle.process
    try:
        _, stderr = proc.communicate()
    except (OSError, ValueError) as exc:
        message = f"lost track of launch helper: {exc}"
    else:
        if proc.returncode == 0:
            return
        detail = (stderr or "").strip() if isinstance(stderr, str) else ""
        message = detail or f"open exited with status {proc.returncode}"
    logger.warning("Fork launch failed: %s", message)
    handle.errors.append(message)
    if on_error is not None:
        on_error(message)


def launch(
    request: LaunchRequest,
    *,
    app_name: str = DEFAULT_APP_NAME,
    on_error: Optional[ErrorCallback] = None,
    spawner: Spawner = spawn_detached,
) -> LaunchHandle:
    """Spawn Fork for ``request`` and return immediately.

    Raises:
        LaunchError: When the process cannot be started at all.
    """
    env = request.environment
    if env is ExecutionEnvironment.MACOS:
        command = build_macos_command(request.directory, app_name)
        try:
            proc = spawner(command, shell=True, capture_stderr=True)
        except OSError as exc:
            raise LaunchError(f"Could not run open: {exc}") from exc
        handle = LaunchHandle(process=proc)
        handle.watcher = threading.Thread(
            target=_watch_helper,
            args=(handle, on_error),
            name="forklaunch-open-watcher",
            daemon=True,
        )
        handle.watcher.start()
        logger.info("Requested %s for %s", app_name, request.directory)
        return handle

    if env in (ExecutionEnvironment.WINDOWS_NATIVE, ExecutionEnvironment.WINDOWS_WSL):
        if not request.executable:
            raise LaunchError("No Fork executable to start")
        argv = build_direct_argv(request.executable, request.directory)
        try:
            proc = spawner(argv)
        except OSError as exc:
            raise LaunchError(f"Could not start {request.executable}: {exc}") from exc
        logger.info("Started %s for %s", request.executable, request.directory)
        return LaunchHandle(process=proc)

    raise LaunchError(f"Cannot launch Fork in environment {env.value}")


__all__ = [
    "DEFAULT_APP_NAME",
    "LaunchHandle",
    "shell_quote_double",
    "build_macos_command",
    "build_direct_argv",
    "launch",
]
