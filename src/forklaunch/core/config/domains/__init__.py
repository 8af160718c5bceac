"""Domain-specific configuration accessors."""
from __future__ import annotations

from .fork import ForkConfig
from .logging import LoggingConfig
from .timeouts import TimeoutsConfig
from .workspace import WorkspaceConfig
from .wsl import WslConfig

__all__ = ["ForkConfig", "LoggingConfig", "TimeoutsConfig", "WorkspaceConfig", "WslConfig"]
