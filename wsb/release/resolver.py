"""Pick the payload release to bootstrap from.

Policy, in order:
1. the first pre-release in index order,
2. else the first stable release,
3. else (empty or unreachable index) the `latest/download` alias.

The index is fetched once; there are no retries. Any failure degrades to
the fallback locator so the bootstrap itself can still proceed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wsb.core.result import Err, Ok, Result
from wsb.core.structured import as_obj_list
from wsb.output.console import Style
from wsb.release.errors import IndexUnavailable
from wsb.release.model import Release, ReleaseIndex, ResolvedLocator, parse_index

if TYPE_CHECKING:
    from wsb.net.http import HttpClient
    from wsb.output.console import ConsoleProtocol

__all__ = [
    "ReleaseSource",
    "ReleaseResolver",
    "select_release",
]

GITHUB_API = "https://api.github.com"
GITHUB_WEB = "https://github.com"


@dataclass(frozen=True, slots=True)
class ReleaseSource:
    """A GitHub project and the asset name of its payload script."""

    repo: str
    payload: str

    @property
    def index_url(self) -> str:
        return f"{GITHUB_API}/repos/{self.repo}/releases"

    @property
    def releases_base(self) -> str:
        return f"{GITHUB_WEB}/{self.repo}/releases"

    def locator_for_tag(self, tag: str) -> str:
        return f"{self.releases_base}/download/{tag}/{self.payload}"

    def latest_locator(self) -> str:
        return f"{self.releases_base}/latest/download/{self.payload}"


def select_release(index: ReleaseIndex) -> Release | None:
    """Apply the selection policy; None for an empty index."""
    for release in index:
        if release.prerelease:
            return release
    for release in index:
        if not release.prerelease:
            return release
    return None


class ReleaseResolver:
    def __init__(
        self,
        *,
        http: HttpClient,
        source: ReleaseSource,
        console: ConsoleProtocol,
    ) -> None:
        self._http = http
        self._source = source
        self._console = console

    @property
    def source(self) -> ReleaseSource:
        return self._source

    def fetch_index(self) -> Result[ReleaseIndex, IndexUnavailable]:
        url = self._source.index_url
        result = self._http.get_json(url)
        if isinstance(result, Err):
            return Err(
                IndexUnavailable(url=url, message=f"Release index unavailable: {result.error}")
            )

        items = as_obj_list(result.value)
        if items is None:
            return Err(IndexUnavailable(url=url, message="Release index is not a JSON array"))
        return Ok(parse_index(items))

    def fallback(self) -> ResolvedLocator:
        return ResolvedLocator(url=self._source.latest_locator())

    def resolve(self) -> ResolvedLocator:
        """Resolve a payload locator; never fails."""
        match self.fetch_index():
            case Err(error):
                self._console.warning(error.pretty())
                self._console.print("Falling back to the latest stable release", Style.DIM)
                return self.fallback()
            case Ok(index):
                release = select_release(index)

        if release is None:
            self._console.print(
                f"No releases listed for {self._source.repo}; using latest", Style.DIM
            )
            return self.fallback()

        kind = "pre-release" if release.prerelease else "release"
        self._console.info(f"Using {kind} {release.tag}")
        return ResolvedLocator(url=self._source.locator_for_tag(release.tag), tag=release.tag)
