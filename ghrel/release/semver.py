from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum


# Optional leading "v"; pre-release and build suffixes do not take part in bumps.
_TAG_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


class BumpLevel(IntEnum):
    """Magnitude of a version increment, ordered NONE < PATCH < MINOR < MAJOR."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise ValueError(f"negative version component: {self.major}.{self.minor}.{self.patch}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self, prefix: str = "") -> str:
        return f"{prefix}{self}"

    def bump(self, level: BumpLevel) -> SemVer:
        match level:
            case BumpLevel.MAJOR:
                return SemVer(self.major + 1, 0, 0)
            case BumpLevel.MINOR:
                return SemVer(self.major, self.minor + 1, 0)
            case BumpLevel.PATCH:
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise ValueError(f"cannot bump by {level}")


BASELINE = SemVer(0, 0, 0)


def parse_version(name: str) -> SemVer | None:
    m = _TAG_RE.match(name.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def max_version(versions: list[SemVer]) -> SemVer:
    """Highest version, or BASELINE when there is none."""
    return max(versions, default=BASELINE)
