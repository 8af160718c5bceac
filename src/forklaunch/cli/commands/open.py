"""
forklaunch open command.

SUMMARY: Open the current workspace folder in Fork
"""

from __future__ import annotations

import argparse
import sys

from forklaunch.cli._args import add_dry_run_flag, add_standard_flags, add_workspace_args
from forklaunch.cli._utils import run_launch

SUMMARY = "Open the current workspace folder in Fork"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_workspace_args(parser)
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Resolve the root from the focused file or open folders and launch Fork."""
    return run_launch(args)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
