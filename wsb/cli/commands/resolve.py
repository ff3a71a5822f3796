from __future__ import annotations

from pathlib import Path

import typer

from wsb.cli.context import CLIContext, build_context
from wsb.net.http import HttpClient, RealHttpClient
from wsb.release.resolver import ReleaseResolver, ReleaseSource


def make_resolver(ctx: CLIContext, http: HttpClient) -> ReleaseResolver:
    release = ctx.config.release
    return ReleaseResolver(
        http=http,
        source=ReleaseSource(repo=release.repo, payload=release.payload),
        console=ctx.console,
    )


def resolve(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to wsb.toml"),
) -> None:
    """Print the payload URL that `wsb run` would download."""
    ctx = build_context(config, stderr=True)
    http = RealHttpClient(timeout=ctx.config.network.timeout_seconds)
    locator = make_resolver(ctx, http).resolve()
    typer.echo(locator.url)
