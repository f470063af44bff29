"""End-to-end flow: resolve the version, publish it, commit a manifest.

Steps run strictly in order and stop at the first failure. Nothing is
rolled back: a release created before a later failure stays published.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ghrel.core.config import Config
from ghrel.core.result import Err, Ok, Result
from ghrel.hosting.client import HostingClient
from ghrel.hosting.errors import (
    AssetUploadError,
    AuthError,
    ContentLookupError,
    FileCommitError,
    HostingAPIError,
    ReleaseCreationError,
)
from ghrel.output.console import ConsoleProtocol
from ghrel.release.collaborators import ManifestRenderer
from ghrel.release.model import (
    Committer,
    FileUpsertRequest,
    NoRelease,
    PublishedRelease,
    ReleaseRequest,
)
from ghrel.release.publisher import publish
from ghrel.release.resolver import resolve_next_version
from ghrel.release.semver import SemVer
from ghrel.release.upserter import upsert_file

__all__ = ["ManifestCommit", "ReleaseOutcome", "release_commit"]

type PipelineError = (
    AuthError
    | HostingAPIError
    | ReleaseCreationError
    | AssetUploadError
    | ContentLookupError
    | FileCommitError
)


@dataclass(frozen=True, slots=True)
class ManifestCommit:
    """A generated file to commit once the release is published.

    ``fields`` is passed to ``render`` with ``version`` and ``tag`` added.
    """

    owner: str
    repo: str
    path: str
    render: ManifestRenderer
    committer: Committer
    fields: Mapping[str, str]
    message: str | None = None
    branch: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    version: SemVer | NoRelease
    release: PublishedRelease | None = None
    manifest_commit: str | None = None


def release_commit(
    client: HostingClient,
    config: Config,
    owner: str,
    repo: str,
    commit_sha: str,
    *,
    assets: Path | None = None,
    manifest: ManifestCommit | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[ReleaseOutcome, PipelineError]:
    resolved = resolve_next_version(
        client, owner, repo, commit_sha, labels=config.labels, console=console
    )
    if isinstance(resolved, Err):
        return resolved
    version = resolved.value
    if isinstance(version, NoRelease):
        return Ok(ReleaseOutcome(version=version))

    tag = version.to_tag(config.release.tag_prefix)
    published = publish(
        client,
        ReleaseRequest(owner=owner, repo=repo, tag=tag, target_commit=commit_sha, assets=assets),
        tag_message=config.release.tag_message,
        console=console,
    )
    if isinstance(published, Err):
        return published

    if manifest is None:
        return Ok(ReleaseOutcome(version=version, release=published.value))

    fields = {**manifest.fields, "version": str(version), "tag": tag}
    committed = upsert_file(
        client,
        FileUpsertRequest(
            owner=manifest.owner,
            repo=manifest.repo,
            path=manifest.path,
            content=manifest.render(fields).encode("utf-8"),
            message=manifest.message or f"Update {manifest.path} for {tag}",
            committer=manifest.committer,
            branch=manifest.branch,
        ),
        console=console,
    )
    if isinstance(committed, Err):
        return committed

    return Ok(
        ReleaseOutcome(version=version, release=published.value, manifest_commit=committed.value)
    )
