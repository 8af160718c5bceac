"""Domain-specific configuration for the Fork application."""
from __future__ import annotations

from functools import cached_property
from typing import Optional

from ..base import BaseDomainConfig


class ForkConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "fork"

    @cached_property
    def app_name(self) -> str:
        """Registered application name used by ``open -a`` on macOS."""
        return str(self.section.get("app_name") or "Fork")

    @cached_property
    def windows_path(self) -> Optional[str]:
        """Explicit executable override, or None when unset."""
        value = self.section.get("windows_path")
        if value is None:
            return None
        value = str(value).strip()
        return value or None


__all__ = ["ForkConfig"]
