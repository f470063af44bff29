"""HTTP transport abstraction.

This module provides:
- HttpClient: Protocol for HTTP requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

The transport is retry-free: every call is exactly one bounded request.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ghrel.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpRequest",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
        body: Response body text, when the server sent one
    """

    url: str
    status: int
    message: str
    body: str = ""

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """A request as seen by the transport."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict[str, str])
    body: bytes | None = None

    def json(self) -> object:
        """Decode the body as JSON (tests use this to inspect payloads)."""
        if self.body is None:
            return None
        return json.loads(self.body.decode("utf-8"))


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A successful (2xx) response.

    Header names are lower-cased.
    """

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict[str, str])

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def json(self) -> object:
        if not self.body:
            return None
        return json.loads(self.body.decode("utf-8"))


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP requests.

    Non-2xx responses are returned as ``Err(HttpError)`` with the status
    set, transport failures as ``Err(HttpError)`` with status 0.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> Result[HttpResponse, HttpError]: ...


class RealHttpClient:
    """urllib transport for the GitHub API and uploads host.

    Response headers are kept (lower-cased) for `Link` pagination, and the
    body of an error response is kept because GitHub explains failures there.
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = "ghrel") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        # Use system certificates
        self._ssl_context = ssl.create_default_context()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> Result[HttpResponse, HttpError]:
        all_headers = {"User-Agent": self.user_agent, **(headers or {})}
        try:
            req = urllib.request.Request(url, data=body, headers=all_headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(
                    HttpResponse(
                        status=response.status,
                        body=response.read(),
                        headers={k.lower(): v for k, v in response.headers.items()},
                    )
                )
        except urllib.error.HTTPError as e:
            text = _read_error_body(e)
            return Err(HttpError(url=url, status=e.code, message=str(e.reason), body=text))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


def _read_error_body(e: urllib.error.HTTPError) -> str:
    try:
        return e.read().decode("utf-8", errors="replace")
    except OSError:
        return ""


type MockReply = HttpResponse | HttpError | Callable[[HttpRequest], HttpResponse | HttpError]


class MockHttpClient:
    """Mock HTTP client for testing.

    Replies are registered per (method, url). A reply is either a fixed
    HttpResponse/HttpError or a callable that receives the HttpRequest.

    Usage:
        client = MockHttpClient()
        client.set_json("GET", "https://api.github.com/user", {"login": "octo"})
        result = client.request("GET", "https://api.github.com/user")
    """

    def __init__(self) -> None:
        self._replies: dict[tuple[str, str], MockReply] = {}
        self.calls: list[HttpRequest] = []

    def set_reply(self, method: str, url: str, reply: MockReply) -> None:
        self._replies[(method.upper(), url)] = reply

    def set_json(
        self,
        method: str,
        url: str,
        payload: object,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        body = json.dumps(payload).encode("utf-8")
        lowered = {k.lower(): v for k, v in (headers or {}).items()}
        self.set_reply(method, url, HttpResponse(status=status, body=body, headers=lowered))

    def set_error(self, method: str, url: str, status: int, message: str = "error") -> None:
        self.set_reply(method, url, HttpError(url=url, status=status, message=message))

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> Result[HttpResponse, HttpError]:
        req = HttpRequest(method=method.upper(), url=url, headers=dict(headers or {}), body=body)
        self.calls.append(req)

        reply = self._replies.get((req.method, url))
        if reply is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        if callable(reply):
            reply = reply(req)
        if isinstance(reply, HttpError):
            return Err(reply)
        return Ok(reply)

    def calls_to(self, method: str) -> list[HttpRequest]:
        return [c for c in self.calls if c.method == method.upper()]
