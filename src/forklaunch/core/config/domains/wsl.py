"""Domain-specific configuration for WSL detection and path translation."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class WslConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "wsl"

    @cached_property
    def remote_name(self) -> str:
        return str(self.section.get("remote_name") or "wsl")

    @cached_property
    def translator(self) -> str:
        return str(self.section.get("translator") or "wslpath")


__all__ = ["WslConfig"]
