"""Domain-specific configuration for operation timeouts."""
from __future__ import annotations

from functools import cached_property
from typing import Dict

from ..base import BaseDomainConfig

_REQUIRED_TIMEOUT_KEYS = (
    "translation_seconds",
    "launch_watch_seconds",
)


class TimeoutsConfig(BaseDomainConfig):
    """Typed, cached access to timeout configuration."""

    def _config_section(self) -> str:
        return "timeouts"

    def _validate_required_keys(self) -> None:
        if not self.section:
            raise RuntimeError("timeouts section missing from configuration")
        for key in _REQUIRED_TIMEOUT_KEYS:
            if key not in self.section:
                raise RuntimeError(f"timeouts.{key} missing from configuration")

    @cached_property
    def translation_seconds(self) -> float:
        """Timeout for one ``wslpath`` call in seconds."""
        self._validate_required_keys()
        return float(self.section["translation_seconds"])

    @cached_property
    def launch_watch_seconds(self) -> float:
        """How long the CLI waits for ``open -a`` to report failure."""
        self._validate_required_keys()
        return float(self.section["launch_watch_seconds"])

    def get_all_settings(self) -> Dict[str, float]:
        self._validate_required_keys()
        return {key: float(self.section[key]) for key in _REQUIRED_TIMEOUT_KEYS}


__all__ = ["TimeoutsConfig"]
