"""Subprocess execution with Result-based error handling.

`run` captures output (git checks, installers); `run_live` streams to the
terminal (the inline payload); `spawn_detached` starts a process without
waiting on it (the elevated relaunch on Unix).
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from wsb.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_live", "spawn_detached"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 when the process never started.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the OS error when spawning failed.
        os_errno: errno of the OSError when spawning failed, else None.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    os_errno: int | None = None

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def _spawn_failure(cmd: list[str], e: OSError) -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=tuple(cmd), returncode=-1, stdout="", stderr=str(e), os_errno=e.errno
        )
    )


def run(
    cmd: list[str],
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Example:
        match run(["git", "--version"]):
            case Ok(output):
                print(output)
            case Err(e):
                print(e.stderr)
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return _spawn_failure(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_live(cmd: list[str], cwd: Path | None = None) -> Result[None, ProcessError]:
    """Execute a command with output streaming to the terminal."""
    try:
        proc = subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=False)
    except OSError as e:
        return _spawn_failure(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )
    return Ok(None)


def spawn_detached(cmd: list[str]) -> Result[int, ProcessError]:
    """Start a command and return its pid without waiting for it.

    Only a failure to start is reported; the child's exit status is never
    observed.
    """
    kwargs: dict[str, object] = {}
    if sys.platform == "win32":
        kwargs["creationflags"] = (
            subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
        )
    try:
        proc = subprocess.Popen(cmd, close_fds=True, **kwargs)  # type: ignore[call-overload]
    except OSError as e:
        return _spawn_failure(cmd, e)
    return Ok(proc.pid)
