"""
forklaunch - open the Fork Git client at the directory you mean.

Resolves a workspace root from explicit input, editor focus or an interactive
choice, locates a native Fork executable for macOS, Windows or WSL, and
launches it without waiting for it to exit.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
