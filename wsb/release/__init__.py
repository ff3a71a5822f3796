"""Release index lookup and selection."""

from .errors import IndexUnavailable
from .model import Release, ReleaseIndex, ResolvedLocator
from .resolver import ReleaseResolver, ReleaseSource, select_release

__all__ = [
    "IndexUnavailable",
    "Release",
    "ReleaseIndex",
    "ReleaseResolver",
    "ReleaseSource",
    "ResolvedLocator",
    "select_release",
]
