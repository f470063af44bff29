"""Authenticated access to the GitHub REST API.

``HostingClient`` is an explicit value built once per call chain with
``authenticate`` and passed to every operation; there is no process-wide
credential. It adds auth/version headers, resolves API paths against the
configured base URL and exposes the pagination primitive used for tag and
pull-request listings.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit

from ghrel.core.config import GitHubConfig
from ghrel.core.result import Err, Ok, Result
from ghrel.core.structured import as_obj_list
from ghrel.hosting.errors import AuthError, HostingAPIError, api_error
from ghrel.hosting.http import HttpClient, HttpError, HttpResponse

__all__ = [
    "API_VERSION",
    "HostingAPIFailure",
    "HostingClient",
    "ListingError",
    "Page",
    "authenticate",
    "collect_all",
    "next_page_token",
    "paginate",
]

API_VERSION = "2022-11-28"

_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel="([^"]+)"')

type Params = Mapping[str, str | int]
type ListingError = HostingAPIError | AuthError


@dataclass(frozen=True, slots=True)
class HostingClient:
    """Bearer-authenticated GitHub API client.

    Attributes:
        http: Transport used for every request
        token: Bearer credential (never empty)
        settings: Endpoints and page size
    """

    http: HttpClient
    token: str
    settings: GitHubConfig

    def url(self, path: str, params: Params | None = None) -> str:
        """Build an absolute URL; absolute inputs (e.g. upload URLs) are kept."""
        base = path if path.startswith(("http://", "https://")) else self.settings.api_url + path
        if params:
            sep = "&" if "?" in base else "?"
            return base + sep + urlencode({k: str(v) for k, v in params.items()})
        return base

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Params | None = None,
        json_body: object = None,
        data: bytes | None = None,
        content_type: str | None = None,
    ) -> Result[HttpResponse, HttpError]:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": API_VERSION,
        }
        body = data
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        elif content_type is not None:
            headers["Content-Type"] = content_type

        return self.http.request(method, self.url(path, params), headers=headers, body=body)

    def page_fetcher[T](
        self,
        path: str,
        parse_item: Callable[[object], T | None],
        *,
        what: str,
    ) -> Callable[[int | None], Result[Page[T], ListingError]]:
        """Return a ``fetch_page`` for a paginated list endpoint.

        Items for which ``parse_item`` returns None are skipped.
        """

        def fetch_page(token: int | None) -> Result[Page[T], ListingError]:
            params: dict[str, str | int] = {"per_page": self.settings.per_page}
            if token is not None:
                params["page"] = token

            result = self.request("GET", path, params=params)
            if isinstance(result, Err):
                return Err(api_error(HostingAPIError, result.error, f"failed to list {what}"))

            response = result.value
            try:
                raw = as_obj_list(response.json())
            except (ValueError, UnicodeDecodeError) as e:
                return Err(HostingAPIError(message=f"invalid JSON listing {what}: {e}"))
            if raw is None:
                return Err(HostingAPIError(message=f"unexpected payload listing {what}"))

            items = [item for item in (parse_item(obj) for obj in raw) if item is not None]
            return Ok(Page(items=items, next_token=next_page_token(response.header("link"))))

        return fetch_page


@dataclass(frozen=True, slots=True)
class Page[T]:
    """One page of a listing and the token of the page after it (None when last)."""

    items: list[T]
    next_token: int | None


class HostingAPIFailure(Exception):
    """Raised out of ``paginate`` when a page cannot be fetched.

    The iterator has no other way to abort mid-walk; ``collect_all`` turns it
    back into ``Err``.
    """

    def __init__(self, error: ListingError) -> None:
        super().__init__(error.pretty())
        self.error = error


def paginate[T](
    fetch_page: Callable[[int | None], Result[Page[T], ListingError]],
) -> Iterator[T]:
    """Lazily yield every item across pages.

    Pages are fetched strictly in order, starting from the first page
    (token None) on every call. The walk ends when a page has no next token.

    Raises:
        HostingAPIFailure: If any page fetch fails.
    """
    token: int | None = None
    while True:
        result = fetch_page(token)
        if isinstance(result, Err):
            raise HostingAPIFailure(result.error)

        page = result.value
        yield from page.items

        if not page.next_token:
            return
        token = page.next_token


def collect_all[T](
    fetch_page: Callable[[int | None], Result[Page[T], ListingError]],
) -> Result[list[T], ListingError]:
    """Drain every page; any page error discards what was collected so far."""
    try:
        return Ok(list(paginate(fetch_page)))
    except HostingAPIFailure as e:
        return Err(e.error)


def next_page_token(link_header: str | None) -> int | None:
    """Extract the page number of the ``rel="next"`` link, if any."""
    if not link_header:
        return None

    for url, rel in _LINK_RE.findall(link_header):
        if rel != "next":
            continue
        values = parse_qs(urlsplit(url).query).get("page")
        if values and values[0].isdigit():
            return int(values[0])
    return None


def authenticate(
    http: HttpClient,
    token: str | None,
    settings: GitHubConfig | None = None,
    *,
    verify: bool = True,
) -> Result[HostingClient, AuthError | HostingAPIError]:
    """Build a HostingClient for ``token``.

    Args:
        http: Transport to use
        token: Bearer token; None or blank is rejected
        settings: API endpoints (defaults to public GitHub)
        verify: Check the token with ``GET /user`` before returning

    Returns:
        Ok(HostingClient), Err(AuthError) for a missing or rejected token,
        Err(HostingAPIError) when verification could not reach the API.
    """
    settings = settings or GitHubConfig()
    if token is None or not token.strip():
        return Err(
            AuthError(
                message="GitHub token not set",
                hint=f"pass --token or export {settings.token_env}",
            )
        )

    client = HostingClient(http=http, token=token.strip(), settings=settings)
    if not verify:
        return Ok(client)

    result = client.request("GET", "/user")
    if isinstance(result, Err):
        if result.error.status in (401, 403):
            return Err(AuthError.from_http(result.error, "GitHub rejected the token"))
        return Err(HostingAPIError.from_http(result.error, "failed to verify GitHub token"))

    return Ok(client)
