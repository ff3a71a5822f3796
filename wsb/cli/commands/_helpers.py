"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from wsb.core.errors import ErrorCode
from wsb.core.result import Err, Result
from wsb.output.console import Style

if TYPE_CHECKING:
    from wsb.cli.context import CLIContext


def exit_on_error[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode,
) -> None:
    """Print the error and exit with `error_code` if result is Err.

    Error objects are expected to carry `message` and an optional `hint`.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        ctx.console.error(message)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))
