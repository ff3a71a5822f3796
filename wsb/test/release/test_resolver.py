"""Tests for wsb.release.resolver."""

from __future__ import annotations

import pytest

from wsb.core.result import Err, Ok
from wsb.net.http import HttpError, MockHttpClient
from wsb.output.console import MockConsole
from wsb.release.errors import IndexUnavailable
from wsb.release.model import Release
from wsb.release.resolver import ReleaseResolver, ReleaseSource, select_release

SOURCE = ReleaseSource(repo="ChrisTitusTech/winutil", payload="winutil.ps1")
INDEX_URL = "https://api.github.com/repos/ChrisTitusTech/winutil/releases"
LATEST_URL = "https://github.com/ChrisTitusTech/winutil/releases/latest/download/winutil.ps1"


def _resolver(client: MockHttpClient, console: MockConsole | None = None) -> ReleaseResolver:
    return ReleaseResolver(http=client, source=SOURCE, console=console or MockConsole())


class TestReleaseSource:
    def test_index_url(self) -> None:
        assert SOURCE.index_url == INDEX_URL

    def test_locator_for_tag(self) -> None:
        assert SOURCE.locator_for_tag("26.01.01") == (
            "https://github.com/ChrisTitusTech/winutil/releases/download/26.01.01/winutil.ps1"
        )

    def test_latest_locator(self) -> None:
        assert SOURCE.latest_locator() == LATEST_URL


class TestSelectRelease:
    def test_first_prerelease_wins_over_earlier_stable(self) -> None:
        index = (
            Release("v3.0", False),
            Release("v3.1-pre", True),
            Release("v3.0-pre", True),
        )
        assert select_release(index) == Release("v3.1-pre", True)

    def test_first_stable_when_no_prerelease(self) -> None:
        index = (Release("v2.0", False), Release("v1.9", False))
        assert select_release(index) == Release("v2.0", False)

    def test_empty(self) -> None:
        assert select_release(()) is None

    @pytest.mark.parametrize("position", [0, 1, 2, 3])
    def test_prerelease_found_at_any_position(self, position: int) -> None:
        index = [Release(f"s{i}", False) for i in range(4)]
        index[position] = Release("pre", True)
        assert select_release(tuple(index)) == Release("pre", True)


class TestFetchIndex:
    def test_http_error(self) -> None:
        client = MockHttpClient()
        client.set_json(INDEX_URL, HttpError(url=INDEX_URL, status=403, message="rate limited"))

        result = _resolver(client).fetch_index()

        assert isinstance(result, Err)
        assert isinstance(result.error, IndexUnavailable)
        assert "rate limited" in result.error.message

    def test_non_array_body(self) -> None:
        client = MockHttpClient()
        client.set_json(INDEX_URL, {"message": "Not Found"})

        result = _resolver(client).fetch_index()

        assert isinstance(result, Err)
        assert "not a JSON array" in result.error.message

    def test_parses_entries(self) -> None:
        client = MockHttpClient()
        client.set_json(INDEX_URL, [{"tag_name": "v1", "prerelease": False}])

        assert _resolver(client).fetch_index() == Ok((Release("v1", False),))


class TestResolve:
    def test_prerelease_scenario(self) -> None:
        client = MockHttpClient()
        client.set_json(
            INDEX_URL,
            [
                {"tag_name": "v2.1-pre", "prerelease": True},
                {"tag_name": "v2.0", "prerelease": False},
            ],
        )

        locator = _resolver(client).resolve()

        assert locator.tag == "v2.1-pre"
        assert locator.url == SOURCE.locator_for_tag("v2.1-pre")

    def test_stable_only(self) -> None:
        client = MockHttpClient()
        client.set_json(INDEX_URL, [{"tag_name": "v2.0", "prerelease": False}])

        assert _resolver(client).resolve().tag == "v2.0"

    def test_empty_index_uses_latest(self) -> None:
        client = MockHttpClient()
        client.set_json(INDEX_URL, [])

        locator = _resolver(client).resolve()

        assert locator.url == LATEST_URL
        assert locator.is_fallback

    def test_unavailable_index_uses_latest_and_warns(self) -> None:
        console = MockConsole()
        client = MockHttpClient()  # every URL answers 404

        locator = _resolver(client, console).resolve()

        assert locator.url == LATEST_URL
        assert console.has_warning()

    def test_single_attempt(self) -> None:
        client = MockHttpClient()

        _resolver(client).resolve()

        assert client.calls == [("get_json", INDEX_URL)]

    def test_locator_never_empty(self) -> None:
        for body in ([], {}, "garbage", [{"tag_name": "x"}]):
            client = MockHttpClient()
            client.set_json(INDEX_URL, body)
            assert _resolver(client).resolve().url
