"""HTTP client abstraction.

This module provides:
- HttpClient: Protocol for HTTP reads (injectable for tests)
- RealHttpClient: urllib implementation with a bounded timeout
- MockHttpClient: canned responses keyed by URL
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from wsb import __version__
from wsb.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network, timeout and parse errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for read-only HTTP operations."""

    def get_json(self, url: str) -> Result[object, HttpError]:
        """Fetch URL and parse the body as JSON (object or array)."""
        ...

    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL and decode the body as UTF-8 text."""
        ...


class RealHttpClient:
    """HTTP client using urllib and the system certificate store.

    Every request is bounded by `timeout` seconds; a stalled endpoint
    surfaces as an HttpError instead of blocking forever.
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = f"wsb/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(self, url: str, accept: str | None = None) -> Result[bytes, HttpError]:
        headers = {"User-Agent": self.user_agent}
        if accept:
            headers["Accept"] = accept
        try:
            req = urllib.request.Request(url, headers=headers)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(self, url: str) -> Result[object, HttpError]:
        result = self._request(url, accept="application/json")
        if isinstance(result, Err):
            return result

        try:
            data: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)

    def get_text(self, url: str) -> Result[str, HttpError]:
        result = self._request(url)
        if isinstance(result, Err):
            return result

        try:
            # utf-8-sig: release scripts are often saved with a BOM
            return Ok(result.value.decode("utf-8-sig"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))


class MockHttpClient:
    """Mock HTTP client for testing.

    Unknown URLs answer 404.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/o/r/releases", [])
        result = client.get_json("https://api.github.com/repos/o/r/releases")
        assert result == Ok([])
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, object] = {}
        self._text_responses: dict[str, str | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: object) -> None:
        """Set JSON response (any decoded value, or an HttpError) for URL."""
        self._json_responses[url] = response

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._text_responses[url] = response

    def get_json(self, url: str) -> Result[object, HttpError]:
        self.calls.append(("get_json", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))

        if url not in self._text_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._text_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
