from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ghrel.release.semver import SemVer, parse_version


NoReleaseReason = Literal["no_pull_requests", "no_bump_label"]


@dataclass(frozen=True, slots=True)
class PullRequestRef:
    """A pull request associated with a commit, as fetched for one resolution."""

    number: int
    labels: frozenset[str]


@dataclass(frozen=True, slots=True)
class TagRef:
    name: str
    # None when the name is not a semantic version.
    version: SemVer | None

    @classmethod
    def from_name(cls, name: str) -> TagRef:
        return cls(name=name, version=parse_version(name))


@dataclass(frozen=True, slots=True)
class NoRelease:
    """The commit is not release-eligible."""

    reason: NoReleaseReason

    def describe(self) -> str:
        if self.reason == "no_pull_requests":
            return "no pull requests are associated with the commit"
        return "the pull request has no major/minor/patch label"


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    owner: str
    repo: str
    tag: str
    target_commit: str
    # Display name; the tag is used when None.
    name: str | None = None
    # Directory whose top-level files become release assets.
    assets: Path | None = None

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else self.tag


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    id: int
    tag: str
    name: str
    html_url: str | None
    assets: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Committer:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class FileUpsertRequest:
    """Content to commit at ``path``.

    The base revision is not part of the request; the upserter looks it up.
    """

    owner: str
    repo: str
    path: str
    content: bytes
    message: str
    committer: Committer
    # Default branch of the repository when None.
    branch: str | None = None
