"""Fetch the payload, point it at the preset, and run it with admin rights.

States run strictly in order, once each:

    FETCH -> AUGMENT -> ELEVATE_CHECK -> ELEVATED_RELAUNCH | INLINE_EXECUTE

A failed fetch aborts before the privilege check is consulted. When the
process is not elevated the payload is relaunched detached and the
sequencer returns without running anything in this process.
"""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING

from wsb.bootstrap.errors import BootstrapError, PayloadUnavailable
from wsb.bootstrap.payload import Payload, augment_with_preset
from wsb.core.config import DEFAULT_PRESET_FLAG
from wsb.core.result import Err, Ok, Result
from wsb.output.console import Style

if TYPE_CHECKING:
    from wsb.bootstrap.launcher import Launcher, ScriptExecutor
    from wsb.net.http import HttpClient
    from wsb.output.console import ConsoleProtocol
    from wsb.platform.privilege import PrivilegeCheck
    from wsb.release.model import ResolvedLocator

__all__ = ["BootstrapSequencer", "RunOutcome"]


class RunOutcome(Enum):
    RELAUNCHED = auto()  # Elevated child started; it owns the rest of the run
    EXECUTED = auto()  # Payload ran to completion in this process context

    def __str__(self) -> str:
        return self.name.lower()


class BootstrapSequencer:
    def __init__(
        self,
        *,
        http: HttpClient,
        privilege: PrivilegeCheck,
        launcher: Launcher,
        executor: ScriptExecutor,
        console: ConsoleProtocol,
        preset_flag: str = DEFAULT_PRESET_FLAG,
    ) -> None:
        self._http = http
        self._privilege = privilege
        self._launcher = launcher
        self._executor = executor
        self._console = console
        self._preset_flag = preset_flag

    def fetch_payload(self, locator: ResolvedLocator) -> Result[Payload, PayloadUnavailable]:
        self._console.print(f"GET {locator.url}", Style.DIM)
        result = self._http.get_text(locator.url)
        if isinstance(result, Err):
            return Err(
                PayloadUnavailable(
                    url=locator.url,
                    message=f"Could not download payload: {result.error}",
                    hint="Check the network connection and [release] in wsb.toml",
                )
            )
        return Ok(Payload(script=result.value))

    def augment_with_preset(self, payload: Payload, preset_path: Path) -> Payload:
        augmented = augment_with_preset(payload, preset_path, self._preset_flag)
        if augmented is not payload:
            self._console.info(f"Using preset {preset_path}")
        else:
            self._console.print(f"No preset at {preset_path}", Style.DIM)
        return augmented

    def needs_elevation(self) -> bool:
        return not self._privilege.is_elevated()

    def execute_elevated(self, payload: Payload) -> Result[RunOutcome, BootstrapError]:
        """Run `payload` with admin rights, relaunching when necessary."""
        if self.needs_elevation():
            self._console.info("Requesting administrator privileges")
            match self._launcher.relaunch_elevated(payload):
                case Err(error):
                    return Err(error)
                case Ok(handle):
                    self._console.success(f"Payload relaunched elevated via {handle.host}")
                    return Ok(RunOutcome.RELAUNCHED)

        self._console.info("Already elevated; running payload")
        match self._executor.execute(payload):
            case Err(error):
                return Err(error)
            case Ok(_):
                self._console.success("Payload finished")
                return Ok(RunOutcome.EXECUTED)

    def run(
        self, locator: ResolvedLocator, preset_path: Path
    ) -> Result[RunOutcome, BootstrapError]:
        fetched = self.fetch_payload(locator)
        if isinstance(fetched, Err):
            return fetched

        payload = self.augment_with_preset(fetched.value, preset_path)
        return self.execute_elevated(payload)
