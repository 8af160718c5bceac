from __future__ import annotations

"""Subprocess helpers.

- ``run_command`` runs a short-lived helper (``wslpath``) under a mandatory
  timeout. With captured output the helper runs in its own process group,
  which is killed as a whole when the timeout expires.
- ``spawn_detached`` starts a GUI process (Fork, ``open``) and returns at once.

Neither uses a shell unless the caller passes ``shell=True`` explicitly.
"""

import logging
import os
import shlex
import signal
import subprocess
from pathlib import Path
from typing import Any, List, MutableMapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

Command = Union[Sequence[str], str]

_KILL_GRACE_SECONDS = 0.2


def _argv(cmd: Command) -> List[str]:
    if isinstance(cmd, str):
        return shlex.split(cmd)
    return [str(part) for part in cmd]


def _own_group_kwargs() -> dict[str, Any]:
    """Popen kwargs that put the child in a new session / process group."""
    if os.name == "posix":
        return {"start_new_session": True}
    flags = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0) | getattr(subprocess, "DETACHED_PROCESS", 0)
    return {"creationflags": flags} if flags else {}


def _kill_group(proc: subprocess.Popen[Any]) -> None:
    if proc.poll() is not None:
        return
    if os.name != "posix":
        proc.kill()
        proc.wait(timeout=_KILL_GRACE_SECONDS)
        return
    for sig in (signal.SIGTERM, signal.SIGKILL):
        try:
            os.killpg(proc.pid, sig)
        except OSError:
            proc.kill()
        try:
            proc.wait(timeout=_KILL_GRACE_SECONDS)
            return
        except subprocess.TimeoutExpired:
            continue


def run_command(
    cmd: Command,
    *,
    timeout: float,
    cwd: Optional[Union[Path, str]] = None,
    env: Optional[MutableMapping[str, str]] = None,
    capture_output: bool = False,
    text: bool = True,
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Run ``cmd`` to completion within ``timeout`` seconds.

    Raises:
        subprocess.TimeoutExpired: The command ran past ``timeout``.
        subprocess.CalledProcessError: ``check`` is set and the exit status
            is non-zero.
        OSError: The command could not be started.
    """
    argv = _argv(cmd)
    workdir = str(cwd) if cwd is not None else None
    logger.debug("run %s (timeout=%ss)", argv, timeout)
    if not capture_output:
        return subprocess.run(argv, cwd=workdir, env=env, timeout=timeout, text=text, check=check)

    proc = subprocess.Popen(
        argv,
        cwd=workdir,
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=text,
        **_own_group_kwargs(),
    )
    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        _kill_group(proc)
        raise subprocess.TimeoutExpired(argv, timeout, output=exc.output, stderr=exc.stderr) from None

    returncode = proc.returncode if proc.returncode is not None else 0
    if check and returncode != 0:
        raise subprocess.CalledProcessError(returncode, argv, output=stdout, stderr=stderr)
    return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)


def spawn_detached(
    cmd: Command,
    *,
    shell: bool = False,
    cwd: Optional[Union[Path, str]] = None,
    capture_stderr: bool = False,
) -> subprocess.Popen:
    """Start ``cmd`` without waiting for it.

    The child gets its own session (POSIX) or process group (Windows) and no
    stdio from the caller, so it outlives the terminal that started it.

    Args:
        cmd: argv sequence, or a command string when ``shell`` is True
        shell: Run through ``/bin/sh -c``
        cwd: Working directory for the child
        capture_stderr: Pipe stderr so a watcher can report it

    Raises:
        OSError: When the process cannot be started.
    """
    args: Command = cmd if shell else _argv(cmd)
    logger.debug("spawn %s (shell=%s)", args, shell)
    return subprocess.Popen(
        args,
        shell=shell,
        cwd=str(cwd) if cwd is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE if capture_stderr else subprocess.DEVNULL,
        text=True,
        close_fds=True,
        **_own_group_kwargs(),
    )


__all__ = ["run_command", "spawn_detached"]
