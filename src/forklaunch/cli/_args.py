"""Common CLI argument registration utilities.

This module provides reusable argument registration functions shared by the
launch commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag (project whose .forklaunch/config is loaded)."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Project directory used for .forklaunch/config lookup (default: cwd)",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Resolve directory and executable without starting Fork",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log resolution steps to stderr",
    )


def add_remote_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--remote",
        type=str,
        help="Remote-session name (e.g. 'wsl'); auto-detected when omitted",
    )


def add_workspace_args(parser: argparse.ArgumentParser) -> None:
    """Add the flags that describe the open workspace."""
    parser.add_argument(
        "--root",
        dest="roots",
        action="append",
        default=[],
        metavar="[NAME=]PATH",
        help="Workspace folder (repeatable). Defaults to the current directory.",
    )
    parser.add_argument(
        "--workspace",
        type=str,
        metavar="FILE",
        help="Read workspace folders from a .code-workspace file",
    )
    parser.add_argument(
        "--active-file",
        type=str,
        metavar="PATH",
        help="File currently focused in the editor",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that every command uses.

    Adds: --json, --repo-root, --remote, --verbose
    """
    add_json_flag(parser)
    add_repo_root_flag(parser)
    add_remote_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_remote_flag",
    "add_workspace_args",
    "add_standard_flags",
]
