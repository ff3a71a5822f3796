"""Ok/Err values for failures that callers are expected to handle.

Network reads, process launches and config parsing all report failure
through a Result instead of raising, so each step of the bootstrap decides
explicitly whether a failure is fatal or degrades to a fallback.

    match resolver.fetch_index():
        case Ok(index):
            ...
        case Err(error):
            console.warning(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying `value`."""

    value: T

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying `error`."""

    error: E

    def unwrap(self) -> None:
        """Raise ValueError; an Err has no value to hand out."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
