from __future__ import annotations

from dataclasses import dataclass

from wsb.core.structured import as_str_dict, get_bool, get_str


@dataclass(frozen=True, slots=True)
class Release:
    tag: str
    prerelease: bool


ReleaseIndex = tuple[Release, ...]


@dataclass(frozen=True, slots=True)
class ResolvedLocator:
    """Where to download the payload from.

    `tag` is None when the "latest" fallback alias was used.
    """

    url: str
    tag: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.tag is None


def parse_release(obj: object) -> Release | None:
    """Build a Release from one GitHub API entry, or None if malformed."""
    data = as_str_dict(obj)
    if data is None:
        return None
    tag = get_str(data, "tag_name")
    if tag is None:
        return None
    return Release(tag=tag, prerelease=get_bool(data, "prerelease") is True)


def parse_index(items: list[object]) -> ReleaseIndex:
    """Parse a GitHub releases array, keeping API order and skipping junk."""
    releases: list[Release] = []
    for item in items:
        release = parse_release(item)
        if release is not None:
            releases.append(release)
    return tuple(releases)
