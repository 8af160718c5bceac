"""
forklaunch CLI package.

Provides the command-line front end with auto-discovery of commands from
``cli/commands``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Settings, workspace context and the shared launch flow
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_repo_root_flag,
    add_dry_run_flag,
    add_verbose_flag,
    add_remote_flag,
    add_workspace_args,
    add_standard_flags,
)

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_remote_flag",
    "add_workspace_args",
    "add_standard_flags",
]
