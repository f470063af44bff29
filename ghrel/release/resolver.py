"""Next-version resolution from pull request labels.

For a commit, the pull requests that contain it decide the bump: each PR's
own level is the strongest of its ``major``/``minor``/``patch`` labels, and
under the default policy the PR with the highest number wins outright. The
bump is applied once to the highest semantic-version tag of the repository
(``0.0.0`` when there is none).
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from ghrel.core.config import LabelPolicy, LabelsConfig
from ghrel.core.result import Err, Ok, Result
from ghrel.core.structured import as_str_dict, get_int, get_list, get_str
from ghrel.hosting.client import HostingClient, ListingError, collect_all
from ghrel.output.console import ConsoleProtocol
from ghrel.release.model import NoRelease, PullRequestRef, TagRef
from ghrel.release.semver import BumpLevel, SemVer, max_version

__all__ = [
    "canonical_bump",
    "current_version",
    "fetch_pull_requests",
    "fetch_tags",
    "label_bump",
    "resolve_next_version",
]


def _parse_pull_request(obj: object) -> PullRequestRef | None:
    data = as_str_dict(obj)
    if data is None:
        return None
    number = get_int(data, "number")
    if number is None:
        return None

    labels: set[str] = set()
    for raw in get_list(data, "labels") or []:
        label = as_str_dict(raw)
        name = get_str(label, "name") if label is not None else None
        if name is not None:
            labels.add(name)
    return PullRequestRef(number=number, labels=frozenset(labels))


def _parse_tag(obj: object) -> TagRef | None:
    data = as_str_dict(obj)
    if data is None:
        return None
    name = get_str(data, "name")
    if name is None:
        return None
    return TagRef.from_name(name)


def fetch_pull_requests(
    client: HostingClient, owner: str, repo: str, commit_sha: str
) -> Result[list[PullRequestRef], ListingError]:
    path = f"/repos/{owner}/{repo}/commits/{quote(commit_sha, safe='')}/pulls"
    return collect_all(
        client.page_fetcher(path, _parse_pull_request, what=f"pull requests for {commit_sha}")
    )


def fetch_tags(
    client: HostingClient, owner: str, repo: str
) -> Result[list[TagRef], ListingError]:
    path = f"/repos/{owner}/{repo}/tags"
    return collect_all(client.page_fetcher(path, _parse_tag, what=f"tags of {owner}/{repo}"))


def label_bump(labels: Iterable[str], names: LabelsConfig | None = None) -> BumpLevel:
    """Strongest level implied by a label set; unknown labels contribute nothing."""
    names = names or LabelsConfig()
    levels = {
        names.major: BumpLevel.MAJOR,
        names.minor: BumpLevel.MINOR,
        names.patch: BumpLevel.PATCH,
    }
    return max((levels.get(label, BumpLevel.NONE) for label in labels), default=BumpLevel.NONE)


def canonical_bump(pulls: Iterable[PullRequestRef], names: LabelsConfig | None = None) -> BumpLevel:
    """The single bump to apply for a commit's pull requests."""
    names = names or LabelsConfig()
    pulls = list(pulls)
    if not pulls:
        return BumpLevel.NONE

    if names.policy is LabelPolicy.STRONGEST_LABEL:
        return max(label_bump(pr.labels, names) for pr in pulls)

    latest = max(pulls, key=lambda pr: pr.number)
    return label_bump(latest.labels, names)


def current_version(tags: Iterable[TagRef]) -> SemVer:
    return max_version([t.version for t in tags if t.version is not None])


def resolve_next_version(
    client: HostingClient,
    owner: str,
    repo: str,
    commit_sha: str,
    *,
    labels: LabelsConfig | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[SemVer | NoRelease, ListingError]:
    """Compute the version to release for ``commit_sha``.

    Both listings are fully drained before any decision is made; a failure on
    any page aborts the resolution.

    Returns:
        Ok(SemVer) with the next version, Ok(NoRelease) when the commit has no
        associated pull request or the deciding PR carries no bump label,
        Err(AuthError) when GitHub rejects the token, or Err(HostingAPIError).
    """
    labels = labels or LabelsConfig()

    pulls = fetch_pull_requests(client, owner, repo, commit_sha)
    if isinstance(pulls, Err):
        return pulls
    if not pulls.value:
        if console is not None:
            console.debug(f"no pull requests associated with {commit_sha}")
        return Ok(NoRelease(reason="no_pull_requests"))

    tags = fetch_tags(client, owner, repo)
    if isinstance(tags, Err):
        return tags
    current = current_version(tags.value)

    if console is not None:
        for pr in sorted(pulls.value, key=lambda p: p.number):
            console.debug(
                f"PR #{pr.number} labels={sorted(pr.labels)} bump={label_bump(pr.labels, labels)}"
            )
        console.debug(f"current version: {current} ({len(tags.value)} tags)")

    bump = canonical_bump(pulls.value, labels)
    if bump is BumpLevel.NONE:
        return Ok(NoRelease(reason="no_bump_label"))

    next_version = current.bump(bump)
    if console is not None:
        console.debug(f"bump {bump}: {current} -> {next_version}")
    return Ok(next_version)

