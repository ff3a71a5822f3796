"""User-level directories (home, config dir)."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_windows

__all__ = [
    "home",
    "user_config_dir",
    "user_cache_dir",
    "clear_caches",
]

APP_NAME = "wsb"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get the user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then Path.home().
    """
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Directory holding the user-wide wsb.toml.

    ~/.config/wsb/ (or $XDG_CONFIG_HOME/wsb) on Unix, %APPDATA%\\wsb on Windows.
    """
    if is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """Per-user scratch space (the staged payload script).

    ~/.cache/wsb/ (or $XDG_CACHE_HOME/wsb) on Unix, %LOCALAPPDATA%\\wsb on Windows.
    """
    if is_windows():
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local) / APP_NAME
        return home() / "AppData" / "Local" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    return home() / ".cache" / APP_NAME


def clear_caches() -> None:
    """Forget cached paths (tests change HOME/APPDATA)."""
    home.cache_clear()
    user_config_dir.cache_clear()
    user_cache_dir.cache_clear()
