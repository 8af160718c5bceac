"""
Command dispatcher for the ``forklaunch`` console script.

Every non-underscore module in ``cli/commands`` is a command. A command
module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``; ``open_here.py`` is invoked as ``open-here`` (the
underscore spelling stays as an alias).
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pkgutil
import sys
from functools import lru_cache
from types import ModuleType
from typing import Callable, NamedTuple, Optional

from forklaunch import __version__

logger = logging.getLogger(__name__)

COMMANDS_PACKAGE = "forklaunch.cli.commands"
EXIT_INTERRUPTED = 130


class CommandSpec(NamedTuple):
    name: str
    module: ModuleType
    summary: str
    register_args: Optional[Callable[[argparse.ArgumentParser], None]]
    main: Optional[Callable[[argparse.Namespace], int]]

    @property
    def cli_name(self) -> str:
        return self.name.replace("_", "-")


@lru_cache(maxsize=1)
def discover_commands() -> tuple[CommandSpec, ...]:
    """Import every command module, sorted by name.

    A module that fails to import is skipped with a warning so one broken
    command does not take down the others.
    """
    package = importlib.import_module(COMMANDS_PACKAGE)
    specs: list[CommandSpec] = []
    for info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
        if info.ispkg or info.name.startswith("_"):
            continue
        try:
            module = importlib.import_module(f"{COMMANDS_PACKAGE}.{info.name}")
        except ImportError as exc:
            logger.warning("could not import command %s: %s", info.name, exc)
            continue
        specs.append(
            CommandSpec(
                name=info.name,
                module=module,
                summary=getattr(module, "SUMMARY", info.name),
                register_args=getattr(module, "register_args", None),
                main=getattr(module, "main", None),
            )
        )
    return tuple(specs)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forklaunch",
        description="Open the Fork Git client at the workspace folder you mean",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", title="commands", metavar="<command>")
    for spec in discover_commands():
        aliases = [spec.name] if spec.cli_name != spec.name else []
        sub = subparsers.add_parser(spec.cli_name, aliases=aliases, help=spec.summary)
        if spec.register_args is not None:
            spec.register_args(sub)
        if spec.main is not None:
            sub.set_defaults(_func=spec.main)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``forklaunch`` console script.

    Returns:
        0 when Fork was (or would be) opened, 1 for a resolution or launch
        failure, 2 for configuration errors, 130 when interrupted.
    """
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    func = getattr(args, "_func", None)
    if not args.command or func is None:
        parser.print_help()
        return 0

    try:
        return int(func(args))
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_INTERRUPTED


__all__ = ["CommandSpec", "build_parser", "discover_commands", "main"]
