"""Steps that run around the payload: git prerequisite and wallpapers."""

from .assets import AssetError, WallpaperOutcome, WallpaperService
from .prereqs import GitPrereqService, PrereqError, git_install_command

__all__ = [
    "AssetError",
    "GitPrereqService",
    "PrereqError",
    "WallpaperOutcome",
    "WallpaperService",
    "git_install_command",
]
