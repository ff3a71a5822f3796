from __future__ import annotations

from pathlib import Path

import typer

from wsb.cli.commands._helpers import exit_on_error
from wsb.cli.context import CLIContext, build_context
from wsb.core.errors import ErrorCode
from wsb.services.assets import WallpaperService
from wsb.services.prereqs import GitPrereqService


def run_extras(ctx: CLIContext, *, dry_run: bool = False) -> None:
    """Ensure git, then the wallpaper checkout. Exits on the first failure."""
    ctx.console.header("Prerequisites")
    git_result = GitPrereqService(platform=ctx.platform, console=ctx.console).ensure(
        dry_run=dry_run
    )
    exit_on_error(git_result, ctx, error_code=ErrorCode.ENV_ERROR)

    service = WallpaperService(
        assets=ctx.config.assets,
        dest=ctx.config.wallpapers_dest,
        console=ctx.console,
        git=git_result.unwrap(),
    )
    exit_on_error(service.ensure(dry_run=dry_run), ctx, error_code=ErrorCode.IO_ERROR)


def wallpapers(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to wsb.toml"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
) -> None:
    """Install git if needed and clone the wallpaper repository."""
    ctx = build_context(config)
    run_extras(ctx, dry_run=dry_run)
