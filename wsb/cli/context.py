from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from wsb.core.config import Config, find_config_path, load_config_or_default
from wsb.core.errors import ErrorCode
from wsb.core.result import Err
from wsb.output.console import ConsoleProtocol, RichConsole, Style
from wsb.platform.detection import PlatformInfo, detect
from wsb.platform.paths import user_config_dir


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    config_path: Path | None
    platform: PlatformInfo
    console: ConsoleProtocol


def build_context(config_path: Path | None = None, *, stderr: bool = False) -> CLIContext:
    """Load config and platform info for a command.

    `stderr=True` sends all console output to stderr, for commands whose
    stdout is meant to be captured.
    """
    console = RichConsole(stderr=stderr)
    path = find_config_path(config_path, user_dir=user_config_dir())

    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        error = config_result.error
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if path is not None:
        console.print(f"config: {path}", Style.DIM)

    return CLIContext(
        config=config_result.value,
        config_path=path,
        platform=detect(),
        console=console,
    )
