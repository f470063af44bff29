"""Typed configuration loading.

Configuration lives in an optional ``ghrel.toml``::

    [github]
    api_url = "https://api.github.com"
    uploads_url = "https://uploads.github.com"
    token_env = "GITHUB_TOKEN"
    timeout = 30.0
    per_page = 100

    [labels]
    major = "major"
    minor = "minor"
    patch = "patch"
    policy = "latest_pr"

    [release]
    tag_prefix = ""
    tag_message = "Create new release"

Every key is optional and falls back to the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GitHubConfig",
    "LabelPolicy",
    "LabelsConfig",
    "ReleaseConfig",
    "load_config",
    "validate_config",
    "DEFAULT_API_URL",
    "DEFAULT_UPLOADS_URL",
    "DEFAULT_TOKEN_ENV",
    "DEFAULT_TAG_MESSAGE",
]

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_UPLOADS_URL = "https://uploads.github.com"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_TIMEOUT_SECONDS = 30.0
# GitHub caps per_page at 100.
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100

DEFAULT_TAG_MESSAGE = "Create new release"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


class LabelPolicy(StrEnum):
    """How the bump is chosen when a commit has several pull requests.

    LATEST_PR: the highest-numbered PR's own labels decide.
    STRONGEST_LABEL: the strongest label across all associated PRs decides.
    """

    LATEST_PR = "latest_pr"
    STRONGEST_LABEL = "strongest_label"


_POLICY_VALUES = frozenset(p.value for p in LabelPolicy)


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """GitHub API endpoints and transport settings."""

    api_url: str = DEFAULT_API_URL
    uploads_url: str = DEFAULT_UPLOADS_URL
    token_env: str = DEFAULT_TOKEN_ENV
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    per_page: int = DEFAULT_PER_PAGE


@dataclass(frozen=True, slots=True)
class LabelsConfig:
    """Names of the precedence labels and the PR selection policy."""

    major: str = "major"
    minor: str = "minor"
    patch: str = "patch"
    policy: LabelPolicy = LabelPolicy.LATEST_PR


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    tag_prefix: str = ""
    tag_message: str = DEFAULT_TAG_MESSAGE


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Values are taken as-is; use ``validate_config`` for range checks.
        """
        github: StrDict = get_table(data, "github") or {}
        labels: StrDict = get_table(data, "labels") or {}
        release: StrDict = get_table(data, "release") or {}

        policy_raw = get_str(labels, "policy")
        policy = LabelPolicy(policy_raw) if policy_raw in _POLICY_VALUES else LabelPolicy.LATEST_PR

        # tag_prefix may legitimately be empty, so it is read without get_str.
        prefix_raw = release.get("tag_prefix")
        tag_prefix = prefix_raw.strip() if isinstance(prefix_raw, str) else ""

        return cls(
            github=GitHubConfig(
                api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
                uploads_url=(get_str(github, "uploads_url") or DEFAULT_UPLOADS_URL).rstrip("/"),
                token_env=get_str(github, "token_env") or DEFAULT_TOKEN_ENV,
                timeout=get_float(github, "timeout") or DEFAULT_TIMEOUT_SECONDS,
                per_page=get_int(github, "per_page") or DEFAULT_PER_PAGE,
            ),
            labels=LabelsConfig(
                major=get_str(labels, "major") or "major",
                minor=get_str(labels, "minor") or "minor",
                patch=get_str(labels, "patch") or "patch",
                policy=policy,
            ),
            release=ReleaseConfig(
                tag_prefix=tag_prefix,
                tag_message=get_str(release, "tag_message") or DEFAULT_TAG_MESSAGE,
            ),
        )


def validate_config(data: Mapping[str, object], *, path: Path | None = None) -> ConfigError | None:
    """Return a ConfigError for values that would be silently replaced by defaults."""
    labels: StrDict = get_table(data, "labels") or {}
    github: StrDict = get_table(data, "github") or {}

    policy = labels.get("policy")
    if policy is not None and (not isinstance(policy, str) or policy not in _POLICY_VALUES):
        allowed = ", ".join(p.value for p in LabelPolicy)
        return ConfigError(f"labels.policy must be one of: {allowed}", path=path)

    per_page = github.get("per_page")
    if per_page is not None:
        n = get_int(github, "per_page")
        if n is None or not 1 <= n <= MAX_PER_PAGE:
            message = f"github.per_page must be an integer in 1..{MAX_PER_PAGE}"
            return ConfigError(message, path=path)

    timeout = github.get("timeout")
    if timeout is not None:
        t = get_float(github, "timeout")
        if t is None or t <= 0:
            return ConfigError("github.timeout must be a positive number", path=path)

    names = [get_str(labels, k) for k in ("major", "minor", "patch")]
    present = [n for n in names if n is not None]
    if len(set(present)) != len(present):
        return ConfigError("labels.major/minor/patch must be distinct", path=path)

    return None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    invalid = validate_config(parsed.value, path=path)
    if invalid is not None:
        return Err(invalid)

    return Ok(Config.from_dict(parsed.value))
