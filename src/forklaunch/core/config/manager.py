"""
forklaunch configuration management (layered YAML).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import yaml

from forklaunch.core.errors import ConfigError
from forklaunch.core.utils.io import iter_yaml_files, read_yaml
from forklaunch.core.utils.merge import deep_merge
from forklaunch.core.utils.paths import (
    get_project_config_dir,
    get_user_config_dir,
    resolve_project_root,
)
from forklaunch.data import defaults_dir

logger = logging.getLogger(__name__)

ENV_PREFIX = "FORKLAUNCH_"
CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate forklaunch configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: FORKLAUNCH_<section>__<key>
    2. Project config: <project>/.forklaunch/config/*.yaml (alphabetical order)
    3. User config: ~/.forklaunch/config/*.yaml (alphabetical order)
    4. Bundled defaults: forklaunch.data/config/*.yaml (alphabetical order)

    Environment keys without a ``__`` separator (``FORKLAUNCH_REMOTE_NAME``,
    ``FORKLAUNCH_USER_CONFIG_DIR``) are process settings, not overrides.
    """

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.repo_root = resolve_project_root(repo_root)
        self._environ = os.environ if environ is None else environ

        self.core_config_dir = defaults_dir()
        self.user_config_dir = get_user_config_dir(self._environ) / "config"
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            logger.debug("loading config %s", path)
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ---------- environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(self._environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX) :]
            if "__" not in raw:
                continue
            segs = raw.split("__")
            if any(seg == "" for seg in segs):
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
            yield [seg.lower() for seg in segs], self._coerce_type(self._environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ---------- loading ----------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        from forklaunch.core.schemas.validation import validate_payload

        validate_payload(config, CONFIG_SCHEMA)

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all layers.

        Raises:
            ConfigError: On invalid YAML, malformed overrides, or schema
                violations.
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_SCHEMA"]
