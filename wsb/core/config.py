"""Typed loading of `wsb.toml`.

Every table is optional; missing keys fall back to the defaults below so
that running `wsb` with no config file bootstraps the stock payload.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "Config",
    "ReleaseConfig",
    "PresetConfig",
    "NetworkConfig",
    "ShellConfig",
    "AssetsConfig",
    "ConfigError",
    "CONFIG_FILE_NAME",
    "CONFIG_ENV_VAR",
    "find_config_path",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "wsb.toml"
CONFIG_ENV_VAR = "WSB_CONFIG"

DEFAULT_REPO = "ChrisTitusTech/winutil"
DEFAULT_PAYLOAD = "winutil.ps1"
DEFAULT_PRESET_FILE = "preset.json"
DEFAULT_PRESET_FLAG = "-CustomPreset"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_PREFERRED_HOST = "wt.exe"
DEFAULT_BASELINE_SHELL = "powershell.exe"
DEFAULT_WALLPAPERS_PARENT = "~/Pictures"
DEFAULT_WALLPAPERS_DIR = "wallpapers"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config file could not be read or has the wrong shape."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Which GitHub project publishes the payload, and its asset name."""

    repo: str = DEFAULT_REPO
    payload: str = DEFAULT_PAYLOAD


@dataclass(frozen=True, slots=True)
class PresetConfig:
    file: str = DEFAULT_PRESET_FILE
    flag: str = DEFAULT_PRESET_FLAG


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class ShellConfig:
    """Host used for the elevated relaunch.

    `preferred` is a terminal host used when found on PATH; `baseline` is
    the shell that actually interprets the payload.
    """

    preferred: str = DEFAULT_PREFERRED_HOST
    baseline: str = DEFAULT_BASELINE_SHELL


@dataclass(frozen=True, slots=True)
class AssetsConfig:
    wallpapers_repo: str | None = None
    wallpapers_parent: str = DEFAULT_WALLPAPERS_PARENT
    wallpapers_dir: str = DEFAULT_WALLPAPERS_DIR


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container.

    `base_dir` is the directory relative paths (the preset file) resolve
    against: the config file's directory, or the working directory when
    running on defaults.
    """

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    preset: PresetConfig = field(default_factory=PresetConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)
    base_dir: Path = field(default_factory=Path.cwd)

    @property
    def preset_path(self) -> Path:
        path = Path(self.preset.file).expanduser()
        if path.is_absolute():
            return path
        return self.base_dir / path

    @property
    def wallpapers_dest(self) -> Path:
        parent = Path(self.assets.wallpapers_parent).expanduser()
        return parent / self.assets.wallpapers_dir

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, base_dir: Path | None = None) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        preset: StrDict = get_table(data, "preset") or {}
        network: StrDict = get_table(data, "network") or {}
        shell: StrDict = get_table(data, "shell") or {}
        assets: StrDict = get_table(data, "assets") or {}

        timeout = get_number(network, "timeout_seconds")
        if timeout is not None and timeout <= 0:
            raise ValueError("network.timeout_seconds must be positive")

        return cls(
            release=ReleaseConfig(
                repo=get_str(release, "repo") or DEFAULT_REPO,
                payload=get_str(release, "payload") or DEFAULT_PAYLOAD,
            ),
            preset=PresetConfig(
                file=get_str(preset, "file") or DEFAULT_PRESET_FILE,
                flag=get_str(preset, "flag") or DEFAULT_PRESET_FLAG,
            ),
            network=NetworkConfig(timeout_seconds=timeout or DEFAULT_TIMEOUT_SECONDS),
            shell=ShellConfig(
                preferred=get_str(shell, "preferred") or DEFAULT_PREFERRED_HOST,
                baseline=get_str(shell, "baseline") or DEFAULT_BASELINE_SHELL,
            ),
            assets=AssetsConfig(
                wallpapers_repo=get_str(assets, "wallpapers_repo"),
                wallpapers_parent=get_str(assets, "wallpapers_parent")
                or DEFAULT_WALLPAPERS_PARENT,
                wallpapers_dir=get_str(assets, "wallpapers_dir") or DEFAULT_WALLPAPERS_DIR,
            ),
            base_dir=base_dir or Path.cwd(),
        )


def find_config_path(
    explicit: Path | None = None,
    *,
    cwd: Path | None = None,
    user_dir: Path | None = None,
) -> Path | None:
    """Locate the config file.

    Order: explicit path, $WSB_CONFIG, ./wsb.toml, <user config dir>/wsb.toml.
    An explicit path is returned even when missing so loading reports it.
    """
    if explicit is not None:
        return explicit

    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    local = (cwd or Path.cwd()) / CONFIG_FILE_NAME
    if local.is_file():
        return local

    if user_dir is not None:
        candidate = user_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    return None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(
            ConfigError(
                f"Config file not found: {path}",
                path=path,
                hint=f"Create {CONFIG_FILE_NAME} or drop --config to use defaults",
            )
        )
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value, base_dir=path.resolve().parent)
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path | None) -> Result[Config, ConfigError]:
    """Load config from `path`, or defaults when no config file was found."""
    if path is None:
        return Ok(Config())
    return load_config(path)
