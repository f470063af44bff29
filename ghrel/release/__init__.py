"""Version resolution and publication."""

from .collaborators import ArtifactSigner, ChecksumFn, ManifestRenderer
from .model import (
    Committer,
    FileUpsertRequest,
    NoRelease,
    PublishedRelease,
    PullRequestRef,
    ReleaseRequest,
    TagRef,
)
from .publisher import publish
from .resolver import resolve_next_version
from .semver import BumpLevel, SemVer
from .upserter import upsert_file

__all__ = [
    "ArtifactSigner",
    "ChecksumFn",
    "ManifestRenderer",
    "Committer",
    "FileUpsertRequest",
    "NoRelease",
    "PublishedRelease",
    "PullRequestRef",
    "ReleaseRequest",
    "TagRef",
    "publish",
    "resolve_next_version",
    "BumpLevel",
    "SemVer",
    "upsert_file",
]
