"""WSL and Windows path namespace helpers."""
from __future__ import annotations

from .translator import (
    DEFAULT_TRANSLATOR,
    PathTranslator,
    WslPathTranslator,
    looks_like_windows_path,
)

__all__ = [
    "DEFAULT_TRANSLATOR",
    "PathTranslator",
    "WslPathTranslator",
    "looks_like_windows_path",
]
