"""Tests for net/http.py - HTTP client abstraction."""

from __future__ import annotations

import io
import urllib.error
import urllib.request
from typing import Any

import pytest

import wsb.net.http as http_mod
from wsb.core.result import Err, Ok
from wsb.net.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Request timed out")
        assert str(error) == "Request timed out (https://example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="u", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 200  # type: ignore[misc]


class TestMockHttpClient:
    def test_json_array(self) -> None:
        client = MockHttpClient()
        client.set_json("https://x/releases", [{"tag_name": "v1"}])

        assert client.get_json("https://x/releases") == Ok([{"tag_name": "v1"}])
        assert client.calls == [("get_json", "https://x/releases")]

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().get_text("https://x/missing")

        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_error_response(self) -> None:
        client = MockHttpClient()
        error = HttpError(url="https://x", status=0, message="Request timed out")
        client.set_text("https://x", error)

        assert client.get_text("https://x") == Err(error)

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)
        assert isinstance(RealHttpClient(), HttpClient)


class _FakeResponse(io.BytesIO):
    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _urlopen_returning(body: bytes) -> Any:
    def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
        return _FakeResponse(body)

    return fake_urlopen


def _urlopen_raising(exc: BaseException) -> Any:
    def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
        raise exc

    return fake_urlopen


class TestRealHttpClient:
    """RealHttpClient with urlopen replaced; no network access."""

    def test_timeout_is_passed_to_urlopen(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, object] = {}

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            seen.update(kwargs)
            seen["agent"] = req.get_header("User-agent")
            return _FakeResponse(b"ok")

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        RealHttpClient(timeout=7.5).get_text("https://example.com")

        assert seen["timeout"] == 7.5
        assert str(seen["agent"]).startswith("wsb/")

    def test_get_json_array(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            http_mod.urllib.request, "urlopen", _urlopen_returning(b'[{"tag_name": "v1"}]')
        )

        result = RealHttpClient().get_json("https://api.example.com")

        assert result == Ok([{"tag_name": "v1"}])

    def test_get_json_parse_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(http_mod.urllib.request, "urlopen", _urlopen_returning(b"<html>"))

        result = RealHttpClient().get_json("https://api.example.com")

        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message

    def test_get_text_strips_bom(self, monkeypatch: pytest.MonkeyPatch) -> None:
        body = "\ufeffWrite-Host hi".encode("utf-8")
        monkeypatch.setattr(http_mod.urllib.request, "urlopen", _urlopen_returning(body))

        assert RealHttpClient().get_text("https://x/script.ps1") == Ok("Write-Host hi")

    def test_http_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        exc = urllib.error.HTTPError(
            "https://x", 403, "Forbidden", {}, None  # type: ignore[arg-type]
        )
        monkeypatch.setattr(http_mod.urllib.request, "urlopen", _urlopen_raising(exc))

        result = RealHttpClient().get_text("https://x")

        assert isinstance(result, Err)
        assert result.error.status == 403
        assert result.error.message == "Forbidden"

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(http_mod.urllib.request, "urlopen", _urlopen_raising(TimeoutError()))

        result = RealHttpClient().get_text("https://x")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "timed out" in result.error.message

    def test_url_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        exc = urllib.error.URLError("Name or service not known")
        monkeypatch.setattr(http_mod.urllib.request, "urlopen", _urlopen_raising(exc))

        result = RealHttpClient().get_json("https://nowhere.invalid")

        assert isinstance(result, Err)
        assert "Name or service not known" in result.error.message
