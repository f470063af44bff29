"""Release publication: release object, annotated tag object, assets.

Creating a release alone may only produce a lightweight tag, so an explicit
tag object is created at the same commit. Failures are not compensated: a
release that exists when tag creation or an upload fails stays in place and
the returned error says how far publication got.
"""

from __future__ import annotations

import mimetypes
import re
from pathlib import Path

from ghrel.core.config import DEFAULT_TAG_MESSAGE
from ghrel.core.result import Err, Ok, Result
from ghrel.core.structured import as_str_dict, get_int, get_str
from ghrel.hosting.client import HostingClient
from ghrel.hosting.errors import (
    AssetUploadError,
    AuthError,
    ReleaseCreationError,
    api_error,
    http_hint,
)
from ghrel.output.console import ConsoleProtocol
from ghrel.release.model import PublishedRelease, ReleaseRequest

__all__ = ["iter_asset_files", "publish"]

# upload_url is a URI template: ".../releases/1/assets{?name,label}"
_URI_TEMPLATE_RE = re.compile(r"\{[^}]*\}$")


def iter_asset_files(directory: Path) -> list[Path]:
    """Direct file entries of ``directory`` in name order; subdirectories are skipped.

    Raises:
        OSError: If the directory cannot be listed.
    """
    return sorted((p for p in directory.iterdir() if p.is_file()), key=lambda p: p.name)


def _create_release(
    client: HostingClient, req: ReleaseRequest
) -> Result[tuple[int, str, str | None], ReleaseCreationError | AuthError]:
    result = client.request(
        "POST",
        f"/repos/{req.owner}/{req.repo}/releases",
        json_body={
            "tag_name": req.tag,
            "target_commitish": req.target_commit,
            "name": req.display_name,
        },
    )
    if isinstance(result, Err):
        return Err(api_error(ReleaseCreationError, result.error, "failed to create release"))

    try:
        data = as_str_dict(result.value.json())
    except (ValueError, UnicodeDecodeError) as e:
        return Err(ReleaseCreationError(message=f"invalid JSON from create release: {e}"))

    release_id = get_int(data, "id") if data is not None else None
    if data is None or release_id is None:
        return Err(ReleaseCreationError(message="create release response has no id"))

    upload_url = get_str(data, "upload_url")
    if upload_url is None:
        base = client.settings.uploads_url
        upload_url = f"{base}/repos/{req.owner}/{req.repo}/releases/{release_id}/assets"
    return Ok((release_id, _URI_TEMPLATE_RE.sub("", upload_url), get_str(data, "html_url")))


def _create_tag_object(
    client: HostingClient, req: ReleaseRequest, message: str
) -> Result[None, ReleaseCreationError | AuthError]:
    result = client.request(
        "POST",
        f"/repos/{req.owner}/{req.repo}/git/tags",
        json_body={
            "tag": req.tag,
            "message": message,
            "object": req.target_commit,
            "type": "commit",
        },
    )
    if isinstance(result, Err):
        return Err(api_error(ReleaseCreationError, result.error, "failed to create tag"))
    return Ok(None)


def _upload_assets(
    client: HostingClient,
    directory: Path,
    *,
    release_id: int,
    upload_url: str,
    console: ConsoleProtocol | None,
) -> Result[tuple[str, ...], AssetUploadError]:
    uploaded: list[str] = []
    try:
        files = iter_asset_files(directory)
    except OSError as e:
        return Err(
            AssetUploadError(
                message=f"failed to read asset directory: {directory}",
                hint=str(e),
                release_id=release_id,
            )
        )

    for path in files:
        try:
            content = path.read_bytes()
        except OSError as e:
            return Err(
                AssetUploadError(
                    message=f"failed to read asset: {path.name}",
                    hint=str(e),
                    release_id=release_id,
                    uploaded=tuple(uploaded),
                )
            )

        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        result = client.request(
            "POST",
            upload_url,
            params={"name": path.name},
            data=content,
            content_type=content_type,
        )
        if isinstance(result, Err):
            err = result.error
            return Err(
                AssetUploadError(
                    message=f"failed to upload asset: {path.name}",
                    status=err.status,
                    hint=http_hint(err),
                    release_id=release_id,
                    uploaded=tuple(uploaded),
                )
            )

        uploaded.append(path.name)
        if console is not None:
            console.debug(f"added file to release: {path.name}")

    return Ok(tuple(uploaded))


def publish(
    client: HostingClient,
    req: ReleaseRequest,
    *,
    tag_message: str = DEFAULT_TAG_MESSAGE,
    console: ConsoleProtocol | None = None,
) -> Result[PublishedRelease, ReleaseCreationError | AssetUploadError | AuthError]:
    """Create the release and tag object for ``req`` and upload its assets.

    Returns:
        Ok(PublishedRelease); Err(ReleaseCreationError) if the release or tag
        could not be created; Err(AssetUploadError) if an upload failed, in
        which case the release exists with the assets uploaded before it;
        Err(AuthError) if GitHub rejected the token before the release existed.
    """
    created = _create_release(client, req)
    if isinstance(created, Err):
        return created
    release_id, upload_url, html_url = created.value
    if console is not None:
        console.debug(f"created release {release_id} for {req.tag}")

    tagged = _create_tag_object(client, req, tag_message)
    if isinstance(tagged, Err):
        return tagged

    assets: tuple[str, ...] = ()
    if req.assets is not None:
        uploaded = _upload_assets(
            client,
            req.assets,
            release_id=release_id,
            upload_url=upload_url,
            console=console,
        )
        if isinstance(uploaded, Err):
            return uploaded
        assets = uploaded.value

    return Ok(
        PublishedRelease(
            id=release_id,
            tag=req.tag,
            name=req.display_name,
            html_url=html_url,
            assets=assets,
        )
    )
