"""Create-or-update of a single file through the Contents API.

GitHub accepts an update only when it carries the blob SHA of the content
being replaced, and rejects a create for a path that already exists. The
upserter therefore looks the path up first and sends the SHA only when the
file exists. A conflict at submission time (someone else committed in
between) is returned as FileCommitError; it is never retried or merged.
Concurrent upserts to the same path must be serialised by the caller.
"""

from __future__ import annotations

import base64
from urllib.parse import quote

from ghrel.core.result import Err, Ok, Result
from ghrel.core.structured import as_str_dict, get_str, get_table
from ghrel.hosting.client import HostingClient
from ghrel.hosting.errors import AuthError, ContentLookupError, FileCommitError, api_error
from ghrel.output.console import ConsoleProtocol
from ghrel.release.model import FileUpsertRequest

__all__ = ["lookup_revision", "submit_file", "upsert_file"]


def _contents_path(owner: str, repo: str, path: str) -> str:
    return f"/repos/{owner}/{repo}/contents/{quote(path.lstrip('/'), safe='/')}"


def lookup_revision(
    client: HostingClient,
    owner: str,
    repo: str,
    path: str,
    branch: str | None = None,
) -> Result[str | None, ContentLookupError | AuthError]:
    """Return the blob SHA currently at ``path``, or None if it does not exist."""
    params = {"ref": branch} if branch is not None else None
    result = client.request("GET", _contents_path(owner, repo, path), params=params)
    if isinstance(result, Err):
        if result.error.status == 404:
            return Ok(None)
        return Err(api_error(ContentLookupError, result.error, f"failed to get file: {path}"))

    try:
        data = as_str_dict(result.value.json())
    except (ValueError, UnicodeDecodeError) as e:
        return Err(ContentLookupError(message=f"invalid JSON for contents of {path}: {e}"))

    # A list payload means the path is a directory.
    if data is None:
        return Err(ContentLookupError(message=f"path is not a file: {path}"))

    sha = get_str(data, "sha")
    if sha is None:
        return Err(ContentLookupError(message=f"contents of {path} have no sha"))
    return Ok(sha)


def submit_file(
    client: HostingClient,
    req: FileUpsertRequest,
    base_revision: str | None,
) -> Result[str, FileCommitError | AuthError]:
    """PUT the new content; returns the SHA of the created commit.

    ``base_revision`` must be the blob SHA being replaced, or None to create.
    """
    body: dict[str, object] = {
        "message": req.message,
        "content": base64.b64encode(req.content).decode("ascii"),
        "committer": {"name": req.committer.name, "email": req.committer.email},
    }
    if req.branch is not None:
        body["branch"] = req.branch
    if base_revision is not None:
        body["sha"] = base_revision

    result = client.request("PUT", _contents_path(req.owner, req.repo, req.path), json_body=body)
    if isinstance(result, Err):
        return Err(api_error(FileCommitError, result.error, f"failed to update file: {req.path}"))

    try:
        data = as_str_dict(result.value.json())
    except (ValueError, UnicodeDecodeError) as e:
        return Err(FileCommitError(message=f"invalid JSON from contents update: {e}"))

    commit = get_table(data, "commit") if data is not None else None
    sha = get_str(commit, "sha") if commit is not None else None
    if sha is None:
        return Err(FileCommitError(message=f"update of {req.path} returned no commit sha"))
    return Ok(sha)


def upsert_file(
    client: HostingClient,
    req: FileUpsertRequest,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[str, ContentLookupError | FileCommitError | AuthError]:
    """Create or update ``req.path`` and return the resulting commit SHA."""
    revision = lookup_revision(client, req.owner, req.repo, req.path, req.branch)
    if isinstance(revision, Err):
        return revision

    if console is not None:
        if revision.value is None:
            console.debug(f"creating {req.path}")
        else:
            console.debug(f"updating {req.path} (base {revision.value})")

    return submit_file(client, req, revision.value)
