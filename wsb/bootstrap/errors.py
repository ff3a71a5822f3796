"""Fatal failures of the bootstrap sequence."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "BootstrapError",
    "ElevationDenied",
    "PayloadUnavailable",
    "UntrustedPayloadFailure",
]


@dataclass(frozen=True, slots=True)
class PayloadUnavailable:
    """The payload script could not be downloaded."""

    url: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ElevationDenied:
    """The elevated relaunch did not start (prompt declined or host missing)."""

    host: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class UntrustedPayloadFailure:
    """The payload ran inline and reported failure.

    The payload is opaque; only its exit status is known.
    """

    returncode: int
    message: str
    hint: str | None = None


BootstrapError = PayloadUnavailable | ElevationDenied | UntrustedPayloadFailure
