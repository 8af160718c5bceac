"""Domain-specific configuration for workspace defaults."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class WorkspaceConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "workspace"

    @cached_property
    def default_to_cwd(self) -> bool:
        return bool(self.section.get("default_to_cwd", True))


__all__ = ["WorkspaceConfig"]
