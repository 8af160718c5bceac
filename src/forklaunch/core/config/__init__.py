"""Layered YAML configuration for forklaunch."""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config
from .domains import ForkConfig, LoggingConfig, TimeoutsConfig, WorkspaceConfig, WslConfig
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "ForkConfig",
    "LoggingConfig",
    "TimeoutsConfig",
    "WorkspaceConfig",
    "WslConfig",
    "clear_all_caches",
    "get_cached_config",
]
