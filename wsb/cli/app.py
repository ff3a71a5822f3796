from __future__ import annotations

import typer

from wsb import __version__
from wsb.cli.commands.resolve import resolve
from wsb.cli.commands.run_cmd import bootstrap, run
from wsb.cli.commands.wallpapers import wallpapers
from wsb.cli.context import build_context

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)

app.command()(run)
app.command()(resolve)
app.command()(wallpapers)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Workstation bootstrap: run the system-configuration payload elevated."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    # Bare `wsb` runs the whole sequence with defaults
    if ctx.invoked_subcommand is None:
        bootstrap(build_context())


def main() -> None:
    app()
