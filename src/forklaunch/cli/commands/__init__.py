"""Top-level forklaunch commands (auto-discovered)."""
