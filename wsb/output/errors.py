"""Error presentation utilities.

Centralized error formatting and exit code mapping for bootstrap failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wsb.bootstrap.errors import (
    BootstrapError,
    ElevationDenied,
    PayloadUnavailable,
    UntrustedPayloadFailure,
)
from wsb.core.errors import ErrorCode
from wsb.output.console import Style

if TYPE_CHECKING:
    from wsb.output.console import ConsoleProtocol

__all__ = ["print_bootstrap_error", "bootstrap_error_exit_code"]


def print_bootstrap_error(error: BootstrapError, console: ConsoleProtocol) -> None:
    match error:
        case PayloadUnavailable(message=message, url=url):
            console.error(message)
            console.print(f"url: {url}", Style.DIM)
        case ElevationDenied(message=message, host=host):
            console.error(f"{message} ({host})")
        case UntrustedPayloadFailure(message=message):
            console.error(message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def bootstrap_error_exit_code(error: BootstrapError) -> int:
    match error:
        case PayloadUnavailable():
            return int(ErrorCode.NETWORK_ERROR)
        case ElevationDenied():
            return int(ErrorCode.ELEVATION_ERROR)
        case UntrustedPayloadFailure():
            return int(ErrorCode.PAYLOAD_ERROR)
