"""Shared CLI utility functions.

Builds the per-invocation inputs (configuration, workspace context, remote
name, translator) from parsed arguments and runs the launch flow shared by
``open`` and ``open-here``.
"""
from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from forklaunch.cli._output import OutputFormatter
from forklaunch.core.config import (
    ForkConfig,
    LoggingConfig,
    TimeoutsConfig,
    WorkspaceConfig,
    WslConfig,
    get_cached_config,
)
from forklaunch.core.environment import current_remote_name
from forklaunch.core.errors import ConfigError
from forklaunch.core.logs import configure_logging
from forklaunch.core.orchestrator import open_in_fork
from forklaunch.core.outcome import OutcomeKind, ResolutionOutcome
from forklaunch.core.utils.paths import resolve_project_root
from forklaunch.core.utils.prompt import prompt_choice
from forklaunch.core.workspace import WorkspaceContext, WorkspaceFolder, load_code_workspace
from forklaunch.core.wsl.translator import WslPathTranslator

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


@dataclass(frozen=True)
class Settings:
    """Domain configs read from one merged configuration."""

    fork: ForkConfig
    wsl: WslConfig
    timeouts: TimeoutsConfig
    logging: LoggingConfig
    workspace: WorkspaceConfig


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--repo-root`` or the current directory."""
    raw = getattr(args, "repo_root", None)
    return resolve_project_root(raw or None)


def load_settings(repo_root: Path) -> Settings:
    """Load configuration once and wrap it in domain accessors.

    Raises:
        ConfigError: When configuration is invalid.
    """
    config = get_cached_config(repo_root=repo_root)
    return Settings(
        fork=ForkConfig(repo_root, config=config),
        wsl=WslConfig(repo_root, config=config),
        timeouts=TimeoutsConfig(repo_root, config=config),
        logging=LoggingConfig(repo_root, config=config),
        workspace=WorkspaceConfig(repo_root, config=config),
    )


def parse_root_arg(raw: str) -> WorkspaceFolder:
    """Parse ``--root [NAME=]PATH``.

    A ``NAME=`` prefix is recognized only when the name contains no path
    separator, so ``C:\\a=b`` style paths stay intact.
    """
    name: Optional[str] = None
    path = raw
    if "=" in raw:
        head, tail = raw.split("=", 1)
        if head and tail and "/" not in head and "\\" not in head:
            name, path = head, tail
    path = os.path.abspath(os.path.expanduser(path))
    return WorkspaceFolder.from_path(path, name)


def build_workspace_context(args: argparse.Namespace, *, default_to_cwd: bool = True) -> WorkspaceContext:
    """Build the workspace context for this invocation.

    Raises:
        ValueError: When ``--workspace`` does not point at a workspace file.
    """
    folders: List[WorkspaceFolder] = []
    workspace_file = getattr(args, "workspace", None)
    if workspace_file:
        folders.extend(load_code_workspace(Path(workspace_file).expanduser()))
    for raw in getattr(args, "roots", None) or []:
        folders.append(parse_root_arg(raw))
    if not folders and default_to_cwd:
        folders.append(WorkspaceFolder.from_path(os.getcwd()))

    active = getattr(args, "active_file", None)
    active_path = os.path.abspath(os.path.expanduser(active)) if active else None
    return WorkspaceContext(folders=tuple(folders), active_file=active_path)


def prepare(args: argparse.Namespace, formatter: OutputFormatter) -> Optional[Settings]:
    """Load settings and configure logging; report config errors."""
    try:
        settings = load_settings(get_repo_root(args))
    except ConfigError as exc:
        formatter.failure(exc, error_code="config_error")
        return None
    try:
        configure_logging(
            level=settings.logging.level,
            log_path=settings.logging.file,
            verbose=bool(getattr(args, "verbose", False)),
        )
    except OSError as exc:
        formatter.failure(f"Cannot open log file {settings.logging.file}: {exc}", error_code="config_error")
        return None
    return settings


def resolve_remote_name(args: argparse.Namespace, settings: Settings) -> Optional[str]:
    explicit = getattr(args, "remote", None)
    if explicit:
        return explicit
    return current_remote_name(wsl_remote_name=settings.wsl.remote_name)


def make_translator(settings: Settings) -> WslPathTranslator:
    return WslPathTranslator(settings.wsl.translator, timeout=settings.timeouts.translation_seconds)


def run_launch(args: argparse.Namespace, target: Optional[str] = None) -> int:
    """Resolve and launch; print exactly one result line."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    settings = prepare(args, formatter)
    if settings is None:
        return EXIT_CONFIG_ERROR

    try:
        context = build_workspace_context(args, default_to_cwd=settings.workspace.default_to_cwd)
    except (OSError, ValueError) as exc:
        formatter.failure(exc, error_code="workspace_error")
        return EXIT_CONFIG_ERROR

    dry_run = bool(getattr(args, "dry_run", False))
    outcome = open_in_fork(
        context,
        target,
        platform=sys.platform,
        remote_name=resolve_remote_name(args, settings),
        override=settings.fork.windows_path,
        app_name=settings.fork.app_name,
        chooser=prompt_choice,
        translator=make_translator(settings),
        wsl_remote_name=settings.wsl.remote_name,
        dry_run=dry_run,
    )

    if not outcome.ok:
        formatter.outcome(outcome)
        return EXIT_FAILURE

    if outcome.handle is not None:
        errors = outcome.handle.join(settings.timeouts.launch_watch_seconds)
        if errors:
            formatter.outcome(ResolutionOutcome.failure(OutcomeKind.LAUNCH_FAILED, errors[0]))
            return EXIT_FAILURE

    request = outcome.request
    assert request is not None
    message = f"Would open {request.directory} in Fork" if dry_run else outcome.message
    formatter.outcome(outcome, message=message, dry_run=dry_run)
    return EXIT_OK


__all__ = [
    "EXIT_OK",
    "EXIT_FAILURE",
    "EXIT_CONFIG_ERROR",
    "Settings",
    "get_repo_root",
    "load_settings",
    "parse_root_arg",
    "build_workspace_context",
    "prepare",
    "resolve_remote_name",
    "make_translator",
    "run_launch",
]
