"""Which OS wsb runs on, and for Linux which package family.

The answers pick the elevation mechanism (UAC vs pkexec/sudo) and the
command that installs git. Both are computed once per process.
"""

from __future__ import annotations

import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from pathlib import Path

__all__ = [
    "Platform",
    "LinuxDistro",
    "PlatformInfo",
    "detect",
    "detect_linux_distro",
    "detect_platform",
    "distro_from_os_release",
    "is_windows",
]

_OS_RELEASE = Path("/etc/os-release")


class Platform(Enum):
    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


class LinuxDistro(Enum):
    """Package family; each member maps to one git install command."""

    DEBIAN = auto()
    FEDORA = auto()
    ARCH = auto()
    SUSE = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


# os-release ID / ID_LIKE tokens per family
_DISTRO_IDS: dict[LinuxDistro, frozenset[str]] = {
    LinuxDistro.DEBIAN: frozenset({"debian", "ubuntu", "linuxmint", "pop"}),
    LinuxDistro.FEDORA: frozenset({"fedora", "rhel", "centos", "rocky", "almalinux"}),
    LinuxDistro.ARCH: frozenset({"arch", "manjaro", "endeavouros"}),
    LinuxDistro.SUSE: frozenset({"suse", "opensuse", "sles"}),
}


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    platform: Platform
    distro: LinuxDistro

    @property
    def is_windows(self) -> bool:
        return self.platform == Platform.WINDOWS

    def __str__(self) -> str:
        if self.distro == LinuxDistro.UNKNOWN:
            return str(self.platform)
        return f"{self.platform}-{self.distro}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    # sys.platform rather than platform.system(), which can stall on WMI
    name = _sys.platform
    if name.startswith("linux"):
        return Platform.LINUX
    if name == "darwin":
        return Platform.MACOS
    if name in ("win32", "cygwin", "msys"):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def distro_from_os_release(content: str) -> LinuxDistro:
    """Classify os-release text by its ID and ID_LIKE fields."""
    tokens: set[str] = set()
    for line in content.splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip().upper() in ("ID", "ID_LIKE"):
            tokens.update(value.strip().strip("\"'").lower().split())

    for distro, ids in _DISTRO_IDS.items():
        # opensuse-tumbleweed, opensuse-leap
        if any(token in ids or token.split("-")[0] in ids for token in tokens):
            return distro
    return LinuxDistro.UNKNOWN


@lru_cache(maxsize=1)
def detect_linux_distro() -> LinuxDistro:
    """UNKNOWN off Linux or when /etc/os-release cannot be read."""
    if detect_platform() != Platform.LINUX:
        return LinuxDistro.UNKNOWN
    try:
        content = _OS_RELEASE.read_text(encoding="utf-8")
    except OSError:
        return LinuxDistro.UNKNOWN
    return distro_from_os_release(content)


@lru_cache(maxsize=1)
def detect() -> PlatformInfo:
    return PlatformInfo(platform=detect_platform(), distro=detect_linux_distro())


def is_windows() -> bool:
    return detect_platform() == Platform.WINDOWS
