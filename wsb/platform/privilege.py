"""Query whether the current process already runs elevated.

The check is injected into the bootstrap sequencer so the elevation branch
can be exercised in tests without touching OS state.
"""

from __future__ import annotations

import ctypes
import os
from typing import Protocol, runtime_checkable

from .detection import is_windows

__all__ = [
    "PrivilegeCheck",
    "SystemPrivilegeCheck",
    "FixedPrivilegeCheck",
]


@runtime_checkable
class PrivilegeCheck(Protocol):
    """Read-only view of the process privilege level."""

    def is_elevated(self) -> bool:
        """Return True when running as Administrator / root."""
        ...


class SystemPrivilegeCheck:
    """Ask the OS.

    Windows uses shell32.IsUserAnAdmin, Unix compares the effective uid to
    0. Any failure of the underlying facility reads as "not elevated".
    """

    def is_elevated(self) -> bool:
        if is_windows():
            return self._windows_is_admin()
        return self._unix_is_root()

    @staticmethod
    def _windows_is_admin() -> bool:
        try:
            windll = getattr(ctypes, "windll")
            return bool(windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False

    @staticmethod
    def _unix_is_root() -> bool:
        geteuid = getattr(os, "geteuid", None)
        if geteuid is None:
            return False
        try:
            return geteuid() == 0
        except OSError:
            return False


class FixedPrivilegeCheck:
    """Check returning a preset answer, for tests and dry runs."""

    def __init__(self, elevated: bool) -> None:
        self.elevated = elevated
        self.calls = 0

    def is_elevated(self) -> bool:
        self.calls += 1
        return self.elevated
