"""Workspace context and root directory resolution.

Decides which directory the user means, in priority order:

1. An explicit target (a right-click path or ``file://`` URI). When it lies
   inside an open workspace folder the folder itself is returned, so Fork
   always opens at repository level; otherwise the target is returned as-is.
2. The folder containing the focused file.
3. The only open folder.
4. An interactive choice among several folders (``None`` when cancelled).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from .utils.io import read_jsonc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceFolder:
    name: str
    path: str

    @classmethod
    def from_path(cls, path: str, name: Optional[str] = None) -> "WorkspaceFolder":
        label = name or os.path.basename(os.path.normpath(path)) or path
        return cls(name=label, path=path)


@dataclass(frozen=True)
class ChoiceItem:
    """One entry of the interactive folder picker."""

    label: str
    detail: str
    folder: WorkspaceFolder


# Receives the entries and returns the picked one, or None when dismissed.
Chooser = Callable[[Sequence[ChoiceItem]], Optional[ChoiceItem]]


def _normalize(path: str) -> Optional[Path]:
    try:
        return Path(path).expanduser().resolve()
    except (OSError, RuntimeError, ValueError):
        return None


@dataclass(frozen=True)
class WorkspaceContext:
    """Folders currently open plus the optional focused file."""

    folders: Tuple[WorkspaceFolder, ...] = field(default_factory=tuple)
    active_file: Optional[str] = None

    def folder_for(self, path: str) -> Optional[WorkspaceFolder]:
        """Return the workspace folder containing ``path``.

        Paths are compared after symlink resolution and component by
        component, so ``/r/ab`` is not inside ``/r/a``. When folders are
        nested, the most specific one wins.
        """
        target = _normalize(path)
        if target is None:
            return None

        best: Optional[WorkspaceFolder] = None
        best_depth = -1
        for folder in self.folders:
            root = _normalize(folder.path)
            if root is None:
                continue
            if target == root or target.is_relative_to(root):
                depth = len(root.parts)
                if depth > best_depth:
                    best, best_depth = folder, depth
        return best


def target_to_path(target: str) -> str:
    """Convert a ``file://`` URI to a filesystem path; other values pass through."""
    parsed = urlparse(target)
    if parsed.scheme != "file":
        return target
    raw = unquote(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        raw = f"//{parsed.netloc}{raw}"
    return url2pathname(raw) if os.name == "nt" else raw


def resolve_root(
    context: WorkspaceContext,
    target: Optional[str] = None,
    chooser: Optional[Chooser] = None,
) -> Optional[str]:
    """Determine the single directory the user intends to open.

    Args:
        context: Open folders and focused file for this invocation
        target: Explicit path or ``file://`` URI, if the command got one
        chooser: Interactive picker used when several folders are open

    Returns:
        The directory path, or None when nothing could be determined or the
        user dismissed the picker.
    """
    if target:
        target_path = target_to_path(target)
        folder = context.folder_for(target_path)
        if folder is not None:
            logger.debug("target %s is inside workspace folder %s", target_path, folder.path)
            return folder.path
        return target_path

    if context.active_file:
        folder = context.folder_for(context.active_file)
        if folder is not None:
            logger.debug("focused file %s is inside %s", context.active_file, folder.path)
            return folder.path

    folders = context.folders
    if not folders:
        return None
    if len(folders) == 1:
        return folders[0].path

    if chooser is None:
        logger.info("%d workspace folders open and no chooser available", len(folders))
        return None
    items = [ChoiceItem(label=f.name, detail=f.path, folder=f) for f in folders]
    picked = chooser(items)
    if picked is None:
        logger.info("workspace folder selection cancelled")
        return None
    return picked.folder.path


def load_code_workspace(path: Path) -> List[WorkspaceFolder]:
    """Read folders from a VS Code ``.code-workspace`` file.

    Relative folder paths are resolved against the workspace file's
    directory; a missing ``name`` defaults to the folder's basename. Comments
    and trailing commas are accepted, as VS Code writes them.

    Raises:
        ValueError: When the file is missing, unreadable or not a workspace.
    """
    path = Path(path)
    try:
        data = read_jsonc(path, default=None)
    except OSError as exc:
        raise ValueError(f"Cannot read workspace file {path}: {exc.strerror or exc}") from exc
    except ValueError as exc:
        raise ValueError(f"Invalid workspace file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Not a workspace file: {path}")

    base = path.resolve().parent
    folders: List[WorkspaceFolder] = []
    for entry in data.get("folders") or []:
        if not isinstance(entry, dict) or not entry.get("path"):
            continue
        raw = str(entry["path"])
        folder_path = Path(raw).expanduser()
        if not folder_path.is_absolute():
            folder_path = base / folder_path
        folder_path_str = os.path.normpath(str(folder_path))
        folders.append(WorkspaceFolder.from_path(folder_path_str, entry.get("name") or None))
    return folders


__all__ = [
    "WorkspaceFolder",
    "WorkspaceContext",
    "ChoiceItem",
    "Chooser",
    "target_to_path",
    "resolve_root",
    "load_code_workspace",
]
