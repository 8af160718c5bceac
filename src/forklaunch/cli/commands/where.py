"""
forklaunch where command.

SUMMARY: Show the detected environment and Fork executable candidates
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Dict, List

from forklaunch.cli._args import add_standard_flags
from forklaunch.cli._output import OutputFormatter
from forklaunch.cli._utils import (
    EXIT_CONFIG_ERROR,
    EXIT_FAILURE,
    EXIT_OK,
    make_translator,
    prepare,
    resolve_remote_name,
)
from forklaunch.core.environment import ExecutionEnvironment, detect_environment
from forklaunch.core.errors import TranslationError
from forklaunch.core.locator import executable_candidates, locate_executable
from forklaunch.core.outcome import OutcomeKind, ResolutionOutcome

SUMMARY = "Show the detected environment and Fork executable candidates"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Report discovery results without launching anything."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    settings = prepare(args, formatter)
    if settings is None:
        return EXIT_CONFIG_ERROR

    remote = resolve_remote_name(args, settings)
    env = detect_environment(sys.platform, remote, wsl_remote_name=settings.wsl.remote_name)
    payload: Dict[str, Any] = {
        "platform": sys.platform,
        "remote": remote,
        "environment": env.value,
        "override": settings.fork.windows_path,
    }

    if env is ExecutionEnvironment.UNSUPPORTED:
        formatter.outcome(ResolutionOutcome.failure(OutcomeKind.UNSUPPORTED_PLATFORM))
        return EXIT_FAILURE

    if env is ExecutionEnvironment.MACOS:
        payload["app_name"] = settings.fork.app_name
        formatter.report(
            payload,
            [
                f"Environment: {env.value}",
                f"Fork is opened by application name: {settings.fork.app_name}",
            ],
        )
        return EXIT_OK

    translator = make_translator(settings)
    try:
        candidates = executable_candidates(env, settings.fork.windows_path, translator=translator)
        found = locate_executable(
            env,
            settings.fork.windows_path,
            exists=os.path.exists,
            translator=translator,
        )
    except TranslationError as exc:
        formatter.outcome(ResolutionOutcome.failure(OutcomeKind.TRANSLATION_FAILED, str(exc)))
        return EXIT_FAILURE

    rows: List[Dict[str, Any]] = [{"path": c, "exists": os.path.exists(c)} for c in candidates]
    payload["candidates"] = rows
    payload["executable"] = found

    lines = [f"Environment: {env.value}", "Candidates:"]
    lines.extend(f"  [{'x' if row['exists'] else ' '}] {row['path']}" for row in rows)
    lines.append(f"Executable: {found or '(not found)'}")
    formatter.report(payload, lines)
    return EXIT_OK if found else EXIT_FAILURE


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
