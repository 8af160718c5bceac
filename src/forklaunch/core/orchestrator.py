"""Resolve a directory and open it in Fork.

Composes environment detection, root resolution, WSL path translation,
executable discovery and launching. Every failure ends the invocation with
exactly one :class:`ResolutionOutcome` tag; nothing is raised to the caller.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Mapping, Optional

from .environment import DEFAULT_WSL_REMOTE_NAME, ExecutionEnvironment, detect_environment
from .errors import LaunchError, TranslationError
from .launcher import DEFAULT_APP_NAME, ErrorCallback, LaunchHandle, Spawner, launch
from .locator import locate_executable
from .outcome import LaunchRequest, OutcomeKind, ResolutionOutcome
from .utils.subprocess import spawn_detached
from .workspace import Chooser, WorkspaceContext, resolve_root
from .wsl.translator import PathTranslator, WslPathTranslator

logger = logging.getLogger(__name__)


def _fail(kind: OutcomeKind, reason: Optional[str] = None) -> ResolutionOutcome:
    outcome = ResolutionOutcome.failure(kind, reason)
    logger.warning("%s", outcome.message)
    return outcome


def build_launch_request(
    context: WorkspaceContext,
    target: Optional[str] = None,
    *,
    platform: str = sys.platform,
    remote_name: Optional[str] = None,
    override: Optional[str] = None,
    chooser: Optional[Chooser] = None,
    environ: Optional[Mapping[str, str]] = None,
    exists: Callable[[str], bool] = os.path.exists,
    translator: Optional[PathTranslator] = None,
    wsl_remote_name: str = DEFAULT_WSL_REMOTE_NAME,
) -> ResolutionOutcome:
    """Run every step short of spawning.

    Returns a ``RESOLVED`` outcome carrying the :class:`LaunchRequest`, or
    the failure tag of the first step that failed.
    """
    env = detect_environment(platform, remote_name, wsl_remote_name=wsl_remote_name)
    logger.debug("environment: %s (platform=%s, remote=%s)", env.value, platform, remote_name)
    if env is ExecutionEnvironment.UNSUPPORTED:
        return _fail(OutcomeKind.UNSUPPORTED_PLATFORM, f"platform {platform!r}")

    directory = resolve_root(context, target, chooser)
    if not directory:
        return _fail(OutcomeKind.NO_WORKSPACE)

    if env is ExecutionEnvironment.MACOS:
        return ResolutionOutcome.resolved(LaunchRequest(env, directory))

    if env is ExecutionEnvironment.WINDOWS_WSL:
        translator = translator or WslPathTranslator()
        try:
            directory = translator.to_native_path(directory)
        except TranslationError as exc:
            return _fail(OutcomeKind.TRANSLATION_FAILED, str(exc))

    try:
        executable = locate_executable(
            env,
            override,
            environ=environ,
            exists=exists,
            translator=translator,
        )
    except TranslationError as exc:
        return _fail(OutcomeKind.TRANSLATION_FAILED, str(exc))
    if executable is None:
        return _fail(OutcomeKind.NO_EXECUTABLE_FOUND)

    return ResolutionOutcome.resolved(LaunchRequest(env, directory, executable))


def open_in_fork(
    context: WorkspaceContext,
    target: Optional[str] = None,
    *,
    platform: str = sys.platform,
    remote_name: Optional[str] = None,
    override: Optional[str] = None,
    app_name: str = DEFAULT_APP_NAME,
    chooser: Optional[Chooser] = None,
    environ: Optional[Mapping[str, str]] = None,
    exists: Callable[[str], bool] = os.path.exists,
    translator: Optional[PathTranslator] = None,
    spawner: Spawner = spawn_detached,
    on_error: Optional[ErrorCallback] = None,
    wsl_remote_name: str = DEFAULT_WSL_REMOTE_NAME,
    dry_run: bool = False,
) -> ResolutionOutcome:
    """Resolve the intended directory and launch Fork there.

    Args:
        context: Open workspace folders and focused file
        target: Explicit path or URI (``open-here``); None for ``open``
        platform: Process platform identifier
        remote_name: Remote-session name (``"wsl"`` inside WSL)
        override: Configured Fork executable path
        app_name: macOS application name
        chooser: Picker for multi-folder workspaces
        environ: Environment used for Windows install locations
        exists: Existence check for executable candidates
        translator: WSL path translator
        spawner: Process spawner (see :func:`spawn_detached`)
        on_error: Called with a message if ``open -a`` later fails
        wsl_remote_name: Remote name that identifies WSL
        dry_run: Stop after resolution without spawning

    Returns:
        The outcome. ``RESOLVED`` outcomes from a real launch carry the
        :class:`LaunchHandle` in ``handle``.
    """
    outcome = build_launch_request(
        context,
        target,
        platform=platform,
        remote_name=remote_name,
        override=override,
        chooser=chooser,
        environ=environ,
        exists=exists,
        translator=translator,
        wsl_remote_name=wsl_remote_name,
    )
    if not outcome.ok or dry_run:
        return outcome

    request = outcome.request
    assert request is not None
    try:
        handle: LaunchHandle = launch(request, app_name=app_name, on_error=on_error, spawner=spawner)
    except LaunchError as exc:
        return _fail(OutcomeKind.LAUNCH_FAILED, str(exc))
    return ResolutionOutcome.resolved(request, handle=handle)


__all__ = ["build_launch_request", "open_in_fork"]
