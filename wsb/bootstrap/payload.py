"""The downloaded script and its one-time preset augmentation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

__all__ = ["Payload", "PresetArgument", "preset_suffix", "augment_with_preset"]


@dataclass(frozen=True, slots=True)
class PresetArgument:
    """`<flag> "<path>"` handed to the script."""

    flag: str
    path: Path

    def argv(self) -> tuple[str, str]:
        return (self.flag, str(self.path))

    def __str__(self) -> str:
        return f'{self.flag} "{self.path}"'


@dataclass(frozen=True, slots=True)
class Payload:
    """Script text as downloaded, plus the preset argument once appended.

    `text` is the command-string form, the script followed by the suffix.
    Launchers run `script` from a file and pass `args` separately, so the
    script size is not bounded by the OS command-line limit.
    """

    script: str
    preset: PresetArgument | None = None

    @property
    def augmented(self) -> bool:
        return self.preset is not None

    @property
    def args(self) -> tuple[str, ...]:
        return self.preset.argv() if self.preset else ()

    @property
    def text(self) -> str:
        if self.preset is None:
            return self.script
        return f"{self.script} {self.preset}"

    def with_preset(self, preset: PresetArgument) -> Payload:
        """Attach `preset` once; an augmented payload is returned unchanged."""
        if self.augmented:
            return self
        return replace(self, preset=preset)


def preset_suffix(flag: str, preset_path: Path) -> str:
    return str(PresetArgument(flag, preset_path))


def augment_with_preset(payload: Payload, preset_path: Path, flag: str) -> Payload:
    """Point the payload at the preset file if it exists right now.

    Existence is checked once; the file itself is never read.
    """
    if not preset_path.exists():
        return payload
    return payload.with_preset(PresetArgument(flag, preset_path))
