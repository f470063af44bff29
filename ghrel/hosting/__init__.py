"""GitHub transport, authentication, pagination and typed errors."""

from .client import HostingClient, ListingError, Page, authenticate, collect_all, paginate
from .errors import (
    AssetUploadError,
    AuthError,
    ContentLookupError,
    FileCommitError,
    HostingAPIError,
    HostingError,
    ReleaseCreationError,
)
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = [
    "HostingClient",
    "ListingError",
    "Page",
    "authenticate",
    "collect_all",
    "paginate",
    "AssetUploadError",
    "AuthError",
    "ContentLookupError",
    "FileCommitError",
    "HostingAPIError",
    "HostingError",
    "ReleaseCreationError",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]
