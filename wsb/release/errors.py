"""Error types for release resolution."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IndexUnavailable:
    """The release index could not be fetched or parsed.

    Never fatal: the resolver answers with the "latest" fallback locator.
    """

    url: str
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
