"""Shared base for the per-section configuration accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Typed view over one top-level section of the merged configuration.

    Subclasses name their section and expose settings as cached properties::

        class WslConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "wsl"

            @cached_property
            def remote_name(self) -> str:
                return str(self.section.get("remote_name") or "wsl")

    Several accessors built from the same ``config`` mapping share one load;
    without it the process-wide cache in :mod:`.cache` is used.
    """

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        config: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._repo_root = repo_root
        self._config: Mapping[str, Any] = (
            config if config is not None else get_cached_config(repo_root=repo_root, environ=environ)
        )

    @abstractmethod
    def _config_section(self) -> str: ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This accessor's section; an absent or null section reads as empty."""
        return dict(self._config.get(self._config_section()) or {})


__all__ = ["BaseDomainConfig"]
