"""The two ways a payload is run: relaunched elevated, or executed inline.

Both are narrow boundaries around "run a script we downloaded" so the
sequencer can be tested with fakes and the trust-sensitive calls stay in
one file.

The script is never passed on the command line (Windows caps a command
line at 32K characters, Linux a single argument at 128 KiB). It is staged
to `<user cache dir>/payload.ps1` and run with `-File`; the preset
argument follows as ordinary arguments.
"""

from __future__ import annotations

import ctypes
import errno
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from wsb.bootstrap.errors import ElevationDenied, UntrustedPayloadFailure
from wsb.bootstrap.payload import Payload
from wsb.core.config import ShellConfig
from wsb.core.result import Err, Ok, Result
from wsb.platform.detection import is_windows
from wsb.platform.files import atomic_write_text
from wsb.platform.paths import user_cache_dir
from wsb.platform.process import ProcessError, run_live, spawn_detached

__all__ = [
    "LaunchHandle",
    "Launcher",
    "PAYLOAD_FILE_NAME",
    "ScriptExecutor",
    "ShellHost",
    "ShellScriptExecutor",
    "UnixElevatedLauncher",
    "WindowsElevatedLauncher",
    "default_launcher",
    "select_host",
    "shell_argv",
    "stage_payload",
]

PAYLOAD_FILE_NAME = "payload.ps1"

# ShellExecuteW returns a value <= 32 on failure
_SHELL_EXECUTE_MAX_ERROR = 32
_SE_ERR_FNF = 2
_SE_ERR_PNF = 3
_SE_ERR_ACCESSDENIED = 5
_SW_SHOWNORMAL = 1

_UNIX_ELEVATORS = ("pkexec", "sudo")

_SHELL_HINT = "Install PowerShell or set [shell] baseline in wsb.toml"

Which = Callable[[str], str | None]


@dataclass(frozen=True, slots=True)
class ShellHost:
    """Program to start, and the arguments that precede the script path."""

    program: str
    argv: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class LaunchHandle:
    host: str
    pid: int | None = None


def shell_argv(baseline: str) -> tuple[str, ...]:
    """Baseline shell invocation that runs the script file named next."""
    return (baseline, "-NoProfile", "-ExecutionPolicy", "Bypass", "-File")


def select_host(shell: ShellConfig, which: Which = shutil.which) -> ShellHost:
    """Prefer the terminal host when installed, else the baseline shell."""
    argv = shell_argv(shell.baseline)
    if which(shell.preferred):
        return ShellHost(program=shell.preferred, argv=argv)
    return ShellHost(program=shell.baseline, argv=argv[1:])


def stage_payload(payload: Payload, script_dir: Path) -> Path:
    """Write the script where the shell can read it; raises OSError.

    The BOM makes Windows PowerShell 5.1 decode the file as UTF-8.
    """
    path = script_dir / PAYLOAD_FILE_NAME
    atomic_write_text(path, payload.script, encoding="utf-8-sig")
    return path


def _spawn_hint(error: ProcessError, program: str) -> str | None:
    match error.os_errno:
        case errno.ENOENT:
            return f"{program} was not found; check PATH"
        case errno.EACCES | errno.EPERM:
            return f"{program} is not executable by this user"
        case errno.E2BIG:
            return "The command line is too long for this system"
        case _:
            return None


class Launcher(Protocol):
    def relaunch_elevated(self, payload: Payload) -> Result[LaunchHandle, ElevationDenied]:
        """Start the payload in a new elevated process; do not wait for it."""
        ...


class ScriptExecutor(Protocol):
    def execute(self, payload: Payload) -> Result[None, UntrustedPayloadFailure]:
        """Run the payload synchronously with the current privileges."""
        ...


class WindowsElevatedLauncher:
    """Relaunch through ShellExecuteW with the "runas" verb (UAC prompt).

    A declined prompt makes ShellExecuteW fail, which is the only signal
    the caller gets.
    """

    def __init__(
        self,
        shell: ShellConfig,
        which: Which = shutil.which,
        *,
        script_dir: Path | None = None,
    ) -> None:
        self._shell = shell
        self._which = which
        self._script_dir = script_dir

    def relaunch_elevated(self, payload: Payload) -> Result[LaunchHandle, ElevationDenied]:
        host = select_host(self._shell, self._which)
        try:
            script = stage_payload(payload, self._script_dir or user_cache_dir())
        except OSError as e:
            return Err(ElevationDenied(host=host.program, message=f"Cannot stage payload: {e}"))

        params = subprocess.list2cmdline([*host.argv, str(script), *payload.args])
        try:
            windll = getattr(ctypes, "windll")
            code = int(
                windll.shell32.ShellExecuteW(
                    None, "runas", host.program, params, None, _SW_SHOWNORMAL
                )
            )
        except (AttributeError, OSError) as e:
            return Err(
                ElevationDenied(host=host.program, message=f"Cannot request elevation: {e}")
            )

        if code > _SHELL_EXECUTE_MAX_ERROR:
            return Ok(LaunchHandle(host=host.program))

        if code == _SE_ERR_ACCESSDENIED:
            message = "Elevation prompt was declined"
            hint = "Accept the prompt, or re-run from an Administrator PowerShell"
        elif code in (_SE_ERR_FNF, _SE_ERR_PNF):
            message = f"{host.program} was not found"
            hint = _SHELL_HINT
        else:
            message = f"Elevated launch of {host.program} failed (code {code})"
            hint = "Re-run from an Administrator PowerShell"
        return Err(ElevationDenied(host=host.program, message=message, hint=hint))


class UnixElevatedLauncher:
    """Relaunch through pkexec (or sudo) as a detached child."""

    def __init__(
        self,
        shell: ShellConfig,
        which: Which = shutil.which,
        *,
        script_dir: Path | None = None,
    ) -> None:
        self._shell = shell
        self._which = which
        self._script_dir = script_dir

    def elevator(self) -> str | None:
        for name in _UNIX_ELEVATORS:
            if self._which(name):
                return name
        return None

    def relaunch_elevated(self, payload: Payload) -> Result[LaunchHandle, ElevationDenied]:
        host = select_host(self._shell, self._which)
        elevator = self.elevator()
        if elevator is None:
            return Err(
                ElevationDenied(
                    host=host.program,
                    message="No privilege escalation tool found",
                    hint="Install pkexec or sudo, or run wsb as root",
                )
            )
        # The detached child's exit is never observed; check the host up front
        if not self._which(host.program):
            return Err(
                ElevationDenied(
                    host=host.program,
                    message=f"{host.program} was not found on PATH",
                    hint=_SHELL_HINT,
                )
            )

        try:
            script = stage_payload(payload, self._script_dir or user_cache_dir())
        except OSError as e:
            return Err(ElevationDenied(host=host.program, message=f"Cannot stage payload: {e}"))

        result = spawn_detached(
            [elevator, host.program, *host.argv, str(script), *payload.args]
        )
        match result:
            case Err(e):
                return Err(
                    ElevationDenied(
                        host=host.program,
                        message=f"Elevated launch via {elevator} failed: {e.stderr or e}",
                        hint=_spawn_hint(e, elevator),
                    )
                )
            case Ok(pid):
                return Ok(LaunchHandle(host=host.program, pid=pid))


class ShellScriptExecutor:
    """Run the payload under the baseline shell in the foreground."""

    def __init__(self, shell: ShellConfig, *, script_dir: Path | None = None) -> None:
        self._shell = shell
        self._script_dir = script_dir

    def execute(self, payload: Payload) -> Result[None, UntrustedPayloadFailure]:
        baseline = self._shell.baseline
        try:
            script = stage_payload(payload, self._script_dir or user_cache_dir())
        except OSError as e:
            return Err(UntrustedPayloadFailure(returncode=-1, message=f"Cannot stage payload: {e}"))

        try:
            result = run_live([*shell_argv(baseline), str(script), *payload.args])
        finally:
            script.unlink(missing_ok=True)

        if isinstance(result, Err):
            e = result.error
            if e.returncode < 0:
                hint = _SHELL_HINT if e.os_errno == errno.ENOENT else _spawn_hint(e, baseline)
                return Err(
                    UntrustedPayloadFailure(
                        returncode=e.returncode,
                        message=f"Could not start {baseline}: {e.stderr}",
                        hint=hint,
                    )
                )
            return Err(
                UntrustedPayloadFailure(
                    returncode=e.returncode, message=f"Payload exited with code {e.returncode}"
                )
            )
        return Ok(None)


def default_launcher(shell: ShellConfig) -> Launcher:
    if is_windows():
        return WindowsElevatedLauncher(shell)
    return UnixElevatedLauncher(shell)
