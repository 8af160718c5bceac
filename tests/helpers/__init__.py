"""Shared test helpers (fakes for filesystem, processes and wslpath)."""
