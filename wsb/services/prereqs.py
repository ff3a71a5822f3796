# SPDX-License-Identifier: MIT
"""Make sure git is available, installing it silently when missing.

Only a fixed allowlist of package-manager commands is ever executed; an
unknown platform gets a manual hint instead.
"""

from __future__ import annotations

import os
import shlex
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from wsb.core.result import Err, Ok, Result
from wsb.output.console import ConsoleProtocol, Style
from wsb.platform.detection import LinuxDistro, Platform, PlatformInfo
from wsb.platform.process import run as run_process

__all__ = ["PrereqError", "GitPrereqService", "git_install_command"]

_INSTALL_TIMEOUT_SECONDS = 15 * 60.0

_LINUX_INSTALL: dict[LinuxDistro, list[str]] = {
    LinuxDistro.DEBIAN: ["sudo", "apt", "install", "-y", "git"],
    LinuxDistro.FEDORA: ["sudo", "dnf", "install", "-y", "git"],
    LinuxDistro.ARCH: ["sudo", "pacman", "-S", "--noconfirm", "git"],
    LinuxDistro.SUSE: ["sudo", "zypper", "install", "-y", "git"],
}


@dataclass(frozen=True, slots=True)
class PrereqError:
    kind: Literal["unsupported", "install_failed", "still_missing"]
    message: str
    hint: str | None = None


def git_install_command(info: PlatformInfo) -> list[str] | None:
    """Silent git install command for the platform, or None if unknown."""
    match info.platform:
        case Platform.WINDOWS:
            return [
                "winget",
                "install",
                "--id",
                "Git.Git",
                "-e",
                "--silent",
                "--accept-source-agreements",
                "--accept-package-agreements",
            ]
        case Platform.MACOS:
            return ["brew", "install", "git"]
        case Platform.LINUX:
            command = _LINUX_INSTALL.get(info.distro)
            return list(command) if command else None
        case _:
            return None


def _windows_default_git() -> Path:
    program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
    return Path(program_files) / "Git" / "cmd" / "git.exe"


class GitPrereqService:
    def __init__(
        self,
        *,
        platform: PlatformInfo,
        console: ConsoleProtocol,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._platform = platform
        self._console = console
        self._which = which

    def find_git(self) -> str | None:
        """Path of the git executable, or None when not installed."""
        found = self._which("git")
        if found:
            return found
        if self._platform.is_windows:
            # A fresh winget install is not on this process's PATH yet
            candidate = _windows_default_git()
            if candidate.is_file():
                return str(candidate)
        return None

    def ensure(self, *, dry_run: bool = False) -> Result[str, PrereqError]:
        """Check for git and install it when missing.

        Returns the git executable to use for later steps.
        """
        git = self.find_git()
        if git is not None:
            self._console.success("git is installed")
            return Ok(git)

        command = git_install_command(self._platform)
        if command is None:
            return Err(
                PrereqError(
                    kind="unsupported",
                    message=f"git is missing and cannot be installed on {self._platform}",
                    hint="Install git manually, then re-run wsb",
                )
            )

        self._console.info("git not found; installing")
        self._console.print(f"  {shlex.join(command)}", Style.DIM)
        if dry_run:
            return Ok("git")

        result = run_process(command, timeout=_INSTALL_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            e = result.error
            return Err(
                PrereqError(
                    kind="install_failed",
                    message=f"git installation failed: {e}",
                    hint=e.stderr.strip() or None,
                )
            )

        git = self.find_git()
        if git is None:
            return Err(
                PrereqError(
                    kind="still_missing",
                    message="git is still missing after installation",
                    hint="Open a new terminal and re-run wsb",
                )
            )

        self._console.success("git installed")
        return Ok(git)
