from __future__ import annotations

from pathlib import Path

import typer

from wsb.bootstrap.launcher import ShellScriptExecutor, default_launcher
from wsb.bootstrap.sequencer import BootstrapSequencer, RunOutcome
from wsb.cli.commands.resolve import make_resolver
from wsb.cli.commands.wallpapers import run_extras
from wsb.cli.context import CLIContext, build_context
from wsb.core.result import Err
from wsb.net.http import HttpClient, RealHttpClient
from wsb.output.errors import bootstrap_error_exit_code, print_bootstrap_error
from wsb.platform.privilege import SystemPrivilegeCheck


def make_sequencer(ctx: CLIContext, http: HttpClient) -> BootstrapSequencer:
    shell = ctx.config.shell
    return BootstrapSequencer(
        http=http,
        privilege=SystemPrivilegeCheck(),
        launcher=default_launcher(shell),
        executor=ShellScriptExecutor(shell),
        console=ctx.console,
        preset_flag=ctx.config.preset.flag,
    )


def bootstrap(ctx: CLIContext, *, preset: Path | None = None, skip_extras: bool = False) -> None:
    """Resolve, fetch and run the payload, then the git and wallpaper steps."""
    http = RealHttpClient(timeout=ctx.config.network.timeout_seconds)

    ctx.console.header("Release")
    locator = make_resolver(ctx, http).resolve()

    ctx.console.header("Payload")
    sequencer = make_sequencer(ctx, http)
    result = sequencer.run(locator, preset or ctx.config.preset_path)
    if isinstance(result, Err):
        print_bootstrap_error(result.error, ctx.console)
        raise typer.Exit(code=bootstrap_error_exit_code(result.error))

    if result.value == RunOutcome.RELAUNCHED:
        ctx.console.info("Continue in the elevated window")

    if not skip_extras:
        run_extras(ctx)


def run(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to wsb.toml"),
    preset: Path | None = typer.Option(
        None,
        "--preset",
        help="Preset file handed to the payload when it exists",
    ),
    skip_extras: bool = typer.Option(
        False, "--skip-extras", help="Skip the git and wallpaper steps"
    ),
) -> None:
    """Bootstrap the machine (the default command)."""
    ctx = build_context(config)
    bootstrap(ctx, preset=preset, skip_extras=skip_extras)
