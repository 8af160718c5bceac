"""Path translation across the WSL / Windows boundary.

Translation is delegated to ``wslpath``, which ships with every WSL distro
and knows the distro's actual mount layout (``/mnt/c`` is only the default).
A failed translation is always an error: an untranslated path in the wrong
namespace would make every later existence check meaningless.
"""
from __future__ import annotations

import logging
import re
import subprocess
from typing import Any, Callable, Protocol

from ..errors import TranslationError
from ..utils.subprocess import run_command

logger = logging.getLogger(__name__)

DEFAULT_TRANSLATOR = "wslpath"
DEFAULT_TIMEOUT_SECONDS = 10.0

_DRIVE_RE = re.compile(r"^[A-Za-z]:(?:[\\/]|$)")


def looks_like_windows_path(path: str) -> bool:
    """Return True for drive-letter, UNC, or backslash-containing paths.

    Examples::

        >>> looks_like_windows_path("C:\\\\Tools\\\\Fork.exe")
        True
        >>> looks_like_windows_path("/mnt/c/Tools/Fork.exe")
        False
    """
    if _DRIVE_RE.match(path):
        return True
    if path.startswith("\\\\"):
        return True
    return "\\" in path


class PathTranslator(Protocol):
    def to_native_path(self, wsl_path: str) -> str: ...

    def to_wsl_path(self, native_path: str) -> str: ...


class WslPathTranslator:
    """Translate paths by running the ``wslpath`` helper.

    Args:
        command: Helper executable name or path
        timeout: Seconds to wait for one translation
        runner: Callable with the signature of :func:`run_command`
    """

    def __init__(
        self,
        command: str = DEFAULT_TRANSLATOR,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        runner: Callable[..., subprocess.CompletedProcess[Any]] = run_command,
    ) -> None:
        self.command = command
        self.timeout = timeout
        self._runner = runner

    def to_native_path(self, wsl_path: str) -> str:
        """Translate a WSL path to its Windows form (``wslpath -w``)."""
        return self._translate("-w", wsl_path)

    def to_wsl_path(self, native_path: str) -> str:
        """Translate a Windows path to its WSL form (``wslpath -u``)."""
        return self._translate("-u", native_path)

    def _translate(self, flag: str, path: str) -> str:
        argv = [self.command, flag, path]
        try:
            result = self._runner(
                argv,
                timeout=self.timeout,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip() if isinstance(exc.stderr, str) else ""
            detail = stderr or f"exit status {exc.returncode}"
            raise TranslationError(f"{self.command} {flag} {path!r} failed: {detail}") from exc
        except subprocess.TimeoutExpired as exc:
            raise TranslationError(
                f"{self.command} {flag} {path!r} timed out after {self.timeout:g}s"
            ) from exc
        except OSError as exc:
            raise TranslationError(f"{self.command} is not available: {exc}") from exc

        output = (result.stdout or "").strip()
        if not output or "\n" in output:
            raise TranslationError(f"{self.command} {flag} {path!r} returned unexpected output: {output!r}")
        logger.debug("translated %s -> %s", path, output)
        return output


__all__ = [
    "DEFAULT_TRANSLATOR",
    "DEFAULT_TIMEOUT_SECONDS",
    "PathTranslator",
    "WslPathTranslator",
    "looks_like_windows_path",
]
