from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from forklaunch.core.utils.subprocess import run_command, spawn_detached


def test_run_command_captures_output() -> None:
    result = run_command(
        [sys.executable, "-c", "print('hello')"],
        timeout=30,
        capture_output=True,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "hello"


def test_run_command_check_raises_with_stderr() -> None:
    with pytest.raises(subprocess.CalledProcessError) as info:
        run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"],
            timeout=30,
            capture_output=True,
            check=True,
        )
    assert info.value.returncode == 3
    assert "boom" in info.value.stderr


def test_run_command_times_out() -> None:
    with pytest.raises(subprocess.TimeoutExpired):
        run_command(
            [sys.executable, "-c", "import time; time.sleep(30)"],
            timeout=0.5,
            capture_output=True,
        )


def test_run_command_missing_binary(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        run_command([str(tmp_path / "missing-binary")], timeout=5, capture_output=True)


def test_spawn_detached_returns_without_waiting() -> None:
    proc = spawn_detached([sys.executable, "-c", "import time; time.sleep(0.2)"])
    try:
        assert proc.pid > 0
    finally:
        proc.wait(timeout=30)
    assert proc.returncode == 0


def test_spawn_detached_captures_stderr_for_watchers() -> None:
    proc = spawn_detached(
        [sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(1)"],
        capture_stderr=True,
    )
    _, stderr = proc.communicate(timeout=30)
    assert proc.returncode == 1
    assert stderr == "nope"


def test_spawn_detached_missing_binary(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        spawn_detached([str(tmp_path / "missing-binary")])
