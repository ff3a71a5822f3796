"""Wallpaper folder setup.

Creates the parent folder under the user profile and clones the wallpaper
repository into it. Every step is idempotent: an existing destination is
left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Literal

from wsb.core.config import AssetsConfig
from wsb.core.result import Err, Ok, Result
from wsb.git.repository import Repository
from wsb.output.console import ConsoleProtocol, Style

__all__ = ["AssetError", "WallpaperOutcome", "WallpaperService"]


@dataclass(frozen=True, slots=True)
class AssetError:
    kind: Literal["mkdir_failed", "clone_failed"]
    message: str
    hint: str | None = None


class WallpaperOutcome(Enum):
    CLONED = auto()
    ALREADY_PRESENT = auto()
    NOT_CONFIGURED = auto()
    DRY_RUN = auto()


class WallpaperService:
    def __init__(
        self,
        *,
        assets: AssetsConfig,
        dest: Path,
        console: ConsoleProtocol,
        git: str = "git",
    ) -> None:
        self._assets = assets
        self._dest = dest
        self._console = console
        self._git = git

    @property
    def dest(self) -> Path:
        return self._dest

    def ensure(self, *, dry_run: bool = False) -> Result[WallpaperOutcome, AssetError]:
        self._console.header("Wallpapers")

        url = self._assets.wallpapers_repo
        if not url:
            self._console.print(
                "No wallpaper repository configured ([assets] wallpapers_repo); skipping",
                Style.DIM,
            )
            return Ok(WallpaperOutcome.NOT_CONFIGURED)

        if self._dest.exists():
            self._console.success(f"Wallpapers already present: {self._dest}")
            return Ok(WallpaperOutcome.ALREADY_PRESENT)

        if dry_run:
            self._console.print(f"  would clone {url} -> {self._dest}", Style.DIM)
            return Ok(WallpaperOutcome.DRY_RUN)

        try:
            self._dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(
                AssetError(
                    kind="mkdir_failed",
                    message=f"Cannot create {self._dest.parent}: {e}",
                    hint="Set [assets] wallpapers_parent to a writable folder",
                )
            )

        repo = Repository(self._dest, git=self._git)
        self._console.info(f"Cloning {url}")
        result = repo.clone(url)
        if isinstance(result, Err):
            return Err(
                AssetError(
                    kind="clone_failed",
                    message=f"git clone failed: {result.error.message}",
                    hint=f"Check access to {url}",
                )
            )

        sha = repo.head_sha()
        if sha:
            self._console.print(f"  at {sha[:8]}", Style.DIM)
        self._console.success(f"Wallpapers cloned to {self._dest}")
        return Ok(WallpaperOutcome.CLONED)
