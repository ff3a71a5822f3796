"""Payload download and elevated execution."""

from .errors import BootstrapError, ElevationDenied, PayloadUnavailable, UntrustedPayloadFailure
from .payload import Payload, PresetArgument, augment_with_preset
from .sequencer import BootstrapSequencer, RunOutcome

__all__ = [
    "BootstrapError",
    "BootstrapSequencer",
    "ElevationDenied",
    "Payload",
    "PayloadUnavailable",
    "PresetArgument",
    "RunOutcome",
    "UntrustedPayloadFailure",
    "augment_with_preset",
]
