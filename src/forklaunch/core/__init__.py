"""Core engine: environment detection, root resolution, discovery and launch."""
from __future__ import annotations

from .environment import ExecutionEnvironment, detect_environment
from .errors import ConfigError, ForkLaunchError, LaunchError, TranslationError
from .orchestrator import build_launch_request, open_in_fork
from .outcome import LaunchRequest, OutcomeKind, ResolutionOutcome
from .workspace import WorkspaceContext, WorkspaceFolder, resolve_root

__all__ = [
    "ExecutionEnvironment",
    "detect_environment",
    "ConfigError",
    "ForkLaunchError",
    "LaunchError",
    "TranslationError",
    "build_launch_request",
    "open_in_fork",
    "LaunchRequest",
    "OutcomeKind",
    "ResolutionOutcome",
    "WorkspaceContext",
    "WorkspaceFolder",
    "resolve_root",
]
