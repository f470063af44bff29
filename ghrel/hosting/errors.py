"""Typed failures for every GitHub-facing operation.

Each error kind is its own frozen dataclass so callers can branch with
``isinstance`` and the CLI can map kinds to exit codes. None of them is
retried or recovered locally; the only locally handled outcome is a 404 on
content lookup, which the upserter turns into "create".
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Self

from ghrel.hosting.http import HttpError

__all__ = [
    "HostingError",
    "api_error",
    "http_hint",
    "AuthError",
    "HostingAPIError",
    "ReleaseCreationError",
    "AssetUploadError",
    "ContentLookupError",
    "FileCommitError",
]


@dataclass(frozen=True, slots=True)
class HostingError:
    """Common payload of all hosting errors.

    Attributes:
        message: What failed, in operation terms
        status: HTTP status of the failing request (0 for transport errors)
        hint: Extra detail, usually GitHub's own error message
    """

    message: str
    status: int = 0
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message

    @classmethod
    def from_http(cls, error: HttpError, message: str) -> Self:
        return cls(message=message, status=error.status, hint=http_hint(error))


def http_hint(error: HttpError) -> str:
    # GitHub error bodies look like {"message": "...", "documentation_url": ...}
    if error.body:
        try:
            data: object = json.loads(error.body)
        except ValueError:
            data = None
        if isinstance(data, dict):
            msg = data.get("message")
            if isinstance(msg, str) and msg:
                return f"{error.status}: {msg}" if error.status else msg
    return str(error)


@dataclass(frozen=True, slots=True)
class AuthError(HostingError):
    """Missing, blank or rejected credential."""


@dataclass(frozen=True, slots=True)
class HostingAPIError(HostingError):
    """Pagination or generic API failure."""


@dataclass(frozen=True, slots=True)
class ReleaseCreationError(HostingError):
    """Release or tag object creation failed; nothing is rolled back."""


@dataclass(frozen=True, slots=True)
class AssetUploadError(HostingError):
    """An asset upload failed after the release was created.

    The release exists with only the assets listed in ``uploaded``.
    """

    release_id: int = 0
    uploaded: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ContentLookupError(HostingError):
    """Reading existing content failed with something other than 404."""


@dataclass(frozen=True, slots=True)
class FileCommitError(HostingError):
    """Submitting new file content failed, including revision conflicts."""


def api_error[E: HostingError](kind: type[E], error: HttpError, message: str) -> E | AuthError:
    """Build a ``kind`` error for a failed request; a 401 becomes AuthError instead."""
    if error.status == 401:
        return AuthError.from_http(error, f"{message}: GitHub rejected the token")
    return kind.from_http(error, message)
