"""
forklaunch open-here command.

SUMMARY: Open Fork at a given path or file:// URI
"""

from __future__ import annotations

import argparse
import sys

from forklaunch.cli._args import add_dry_run_flag, add_standard_flags, add_workspace_args
from forklaunch.cli._utils import run_launch

SUMMARY = "Open Fork at a given path or file:// URI"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "target",
        nargs="?",
        help="Path or file:// URI; a path inside a workspace folder opens that folder",
    )
    add_workspace_args(parser)
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    return run_launch(args, target=args.target or None)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
