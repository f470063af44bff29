"""GitHub Actions OIDC token retrieval.

A workflow with ``permissions: id-token: write`` gets two environment
variables, ``ACTIONS_ID_TOKEN_REQUEST_TOKEN`` and
``ACTIONS_ID_TOKEN_REQUEST_URL``. Calling the URL with the request token as
bearer returns ``{"value": "<jwt>"}``.
"""

from __future__ import annotations

from urllib.parse import quote

from ghrel.core.result import Err, Ok, Result
from ghrel.core.structured import as_str_dict, get_str
from ghrel.hosting.errors import AuthError
from ghrel.hosting.http import HttpClient

__all__ = ["REQUEST_TOKEN_ENV", "REQUEST_URL_ENV", "fetch_oidc_token", "oidc_request_url"]

REQUEST_TOKEN_ENV = "ACTIONS_ID_TOKEN_REQUEST_TOKEN"
REQUEST_URL_ENV = "ACTIONS_ID_TOKEN_REQUEST_URL"


def oidc_request_url(request_url: str, audience: str | None) -> str:
    if not audience:
        return request_url
    sep = "&" if "?" in request_url else "?"
    return f"{request_url}{sep}audience={quote(audience, safe='')}"


def fetch_oidc_token(
    http: HttpClient,
    *,
    request_token: str | None,
    request_url: str | None,
    audience: str | None = None,
) -> Result[str, AuthError]:
    """Request an OIDC JWT for the current Actions run.

    Returns:
        Ok with the JWT, or Err(AuthError) when the inputs are missing, the
        request fails, or the response has no ``value``.
    """
    if not request_token or not request_url:
        return Err(
            AuthError(
                message="OIDC request token or URL not set",
                hint=(
                    "run inside GitHub Actions with id-token: write "
                    f"({REQUEST_TOKEN_ENV}, {REQUEST_URL_ENV})"
                ),
            )
        )

    url = oidc_request_url(request_url, audience)
    result = http.request("GET", url, headers={"Authorization": f"bearer {request_token}"})
    if isinstance(result, Err):
        return Err(AuthError.from_http(result.error, "failed to request OIDC token"))

    response = result.value
    if response.status != 200:
        return Err(
            AuthError(message=f"expected status 200, got {response.status}", status=response.status)
        )

    try:
        data = as_str_dict(response.json())
    except (ValueError, UnicodeDecodeError) as e:
        return Err(AuthError(message=f"invalid JSON in OIDC response: {e}"))

    token = get_str(data, "value") if data is not None else None
    if token is None:
        return Err(AuthError(message="OIDC response has no token value"))
    return Ok(token)
