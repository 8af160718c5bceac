"""Launch requests and tagged resolution outcomes.

Every user-facing failure message maps to exactly one :class:`OutcomeKind`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from .environment import ExecutionEnvironment

if TYPE_CHECKING:
    from .launcher import LaunchHandle

MESSAGE_PREFIX = "Fork error:"


class OutcomeKind(str, Enum):
    RESOLVED = "resolved"
    NO_WORKSPACE = "no_workspace"
    NO_EXECUTABLE_FOUND = "no_executable_found"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    TRANSLATION_FAILED = "translation_failed"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True)
class LaunchRequest:
    """Directory and executable, both in the namespace of the spawning platform.

    ``executable`` is None on macOS, where Fork is addressed by its
    registered application name.
    """

    environment: ExecutionEnvironment
    directory: str
    executable: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment.value,
            "directory": self.directory,
            "executable": self.executable,
        }


@dataclass(frozen=True)
class ResolutionOutcome:
    kind: OutcomeKind
    request: Optional[LaunchRequest] = None
    reason: Optional[str] = None
    handle: Optional["LaunchHandle"] = field(default=None, compare=False, repr=False)

    @classmethod
    def resolved(cls, request: LaunchRequest, handle: Optional["LaunchHandle"] = None) -> "ResolutionOutcome":
        return cls(OutcomeKind.RESOLVED, request=request, handle=handle)

    @classmethod
    def failure(cls, kind: OutcomeKind, reason: Optional[str] = None) -> "ResolutionOutcome":
        if kind is OutcomeKind.RESOLVED:
            raise ValueError("failure() requires a failure kind")
        return cls(kind, reason=reason)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.RESOLVED

    @property
    def message(self) -> str:
        """Single-line user-facing message for this outcome."""
        kind = self.kind
        if kind is OutcomeKind.RESOLVED:
            assert self.request is not None
            return f"Opened {self.request.directory} in Fork"
        if kind is OutcomeKind.NO_WORKSPACE:
            return f"{MESSAGE_PREFIX} Working folder not found, open a folder and try again"
        if kind is OutcomeKind.UNSUPPORTED_PLATFORM:
            return f"{MESSAGE_PREFIX} Unsupported platform. Only macOS, Windows and WSL are supported."
        if kind is OutcomeKind.NO_EXECUTABLE_FOUND:
            return f"{MESSAGE_PREFIX} Fork executable not found. Set fork.windows_path to its location."
        if kind is OutcomeKind.TRANSLATION_FAILED:
            return f"{MESSAGE_PREFIX} Could not translate path with wslpath: {self.reason or 'unknown error'}"
        return f"{MESSAGE_PREFIX} {self.reason or 'failed to start Fork'}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"outcome": self.kind.value, "message": self.message}
        if self.request is not None:
            data["request"] = self.request.to_dict()
        if self.reason:
            data["reason"] = self.reason
        return data


__all__ = ["MESSAGE_PREFIX", "OutcomeKind", "LaunchRequest", "ResolutionOutcome"]
