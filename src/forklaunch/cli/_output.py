"""Result rendering for forklaunch commands.

Results go to stdout. Failures go to stderr as one ``Error: ...`` line, or
as one JSON object ``{"error": <tag>, "message": ...}`` with ``--json``.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Iterable, Optional, TextIO, Union

from forklaunch.core.outcome import ResolutionOutcome


class OutputFormatter:
    """Render command results in text or JSON mode."""

    def __init__(
        self,
        json_mode: bool = False,
        *,
        indent: int = 2,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.json_mode = json_mode
        self.indent = indent
        self._stdout = stdout
        self._stderr = stderr

    @property
    def out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr or sys.stderr

    def _dump(self, data: Any, stream: TextIO) -> None:
        print(json.dumps(data, indent=self.indent, default=str), file=stream)

    def failure(self, error: Union[Exception, str], *, error_code: str = "error") -> None:
        """Report a failure on stderr."""
        msg = str(error)
        if self.json_mode:
            self._dump({"error": error_code, "message": msg}, self.err)
        else:
            print(f"Error: {msg}", file=self.err)

    def outcome(self, outcome: ResolutionOutcome, *, message: Optional[str] = None, **extra: Any) -> None:
        """Report a resolution outcome; failures are routed to :meth:`failure`."""
        if not outcome.ok:
            self.failure(outcome.message, error_code=outcome.kind.value)
            return
        if self.json_mode:
            self._dump({"status": "success", **outcome.to_dict(), **extra}, self.out)
        else:
            print(message or outcome.message, file=self.out)

    def report(self, payload: Dict[str, Any], lines: Iterable[str]) -> None:
        """Print ``payload`` as JSON, or the pre-rendered text ``lines``."""
        if self.json_mode:
            self._dump(payload, self.out)
            return
        for line in lines:
            print(line, file=self.out)


__all__ = ["OutputFormatter"]
