"""Exception types shared across forklaunch."""

from __future__ import annotations


class ForkLaunchError(RuntimeError):
    """Base class for failures that end a resolve-and-launch invocation."""


class TranslationError(ForkLaunchError):
    """Raised when the WSL path-translation helper fails or is unavailable."""


class LaunchError(ForkLaunchError):
    """Raised when spawning the Fork process itself fails."""


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or fails validation."""


__all__ = ["ForkLaunchError", "TranslationError", "LaunchError", "ConfigError"]
