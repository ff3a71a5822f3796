"""Git repository abstraction.

Only what the wallpaper step needs: a shallow clone and the resulting HEAD.
All operations return Result types.

Usage:
    repo = Repository(Path("~/Pictures/wallpapers").expanduser())
    match repo.clone("https://github.com/owner/wallpapers.git"):
        case Ok(_):
            print(repo.head_sha())
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from wsb.core.result import Err, Ok, Result
from wsb.platform.process import ProcessError
from wsb.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 10 * 60.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message (git's stderr when available)
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working copy at `path` (which may not exist yet)."""

    def __init__(self, path: Path, *, git: str = "git") -> None:
        self.path = path
        self.git = git

    def clone(self, url: str, *, depth: int | None = 1) -> Result[str, GitError]:
        """Clone `url` into `path`.

        Args:
            url: Remote URL
            depth: Shallow clone depth (None for full history)
        """
        args = [self.git, "clone"]
        if depth is not None:
            args += ["--depth", str(depth)]
        args += [url, str(self.path)]

        result = run_process(args, cwd=self.path.parent, timeout=_GIT_NETWORK_TIMEOUT_SECONDS)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="clone",
                        message=e.stderr.strip() or "git clone failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def head_sha(self) -> str | None:
        """Current commit, or None if unavailable."""
        result = self._run(["rev-parse", "HEAD"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            [self.git, "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )
