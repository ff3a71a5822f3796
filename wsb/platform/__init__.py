"""Platform abstraction layer."""

from .detection import (
    LinuxDistro,
    Platform,
    PlatformInfo,
    detect,
    detect_linux_distro,
    is_windows,
)
from .files import atomic_write_text
from .paths import (
    home,
    user_cache_dir,
    user_config_dir,
)
from .privilege import (
    FixedPrivilegeCheck,
    PrivilegeCheck,
    SystemPrivilegeCheck,
)
from .process import (
    ProcessError,
    run,
    run_live,
    spawn_detached,
)

__all__ = [
    # detection
    "LinuxDistro",
    "Platform",
    "PlatformInfo",
    "detect",
    "detect_linux_distro",
    "is_windows",
    # files
    "atomic_write_text",
    # paths
    "home",
    "user_cache_dir",
    "user_config_dir",
    # privilege
    "FixedPrivilegeCheck",
    "PrivilegeCheck",
    "SystemPrivilegeCheck",
    # process
    "ProcessError",
    "run",
    "run_live",
    "spawn_detached",
]
