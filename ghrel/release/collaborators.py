"""Interfaces of the external steps that run around a release.

Checksums, packaging-manifest rendering (Homebrew formula, Debian control
file) and signing are done by other tools. ghrel only consumes their
results, so they are modelled as callables the caller provides.

``ManifestRenderer`` is called by ``release_commit``. ``ChecksumFn`` and
``ArtifactSigner`` are never called by ghrel; they are the public types for
callers that sign artifacts before ``publish`` and checksum them to fill a
manifest's ``fields``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

__all__ = ["ArtifactSigner", "ChecksumFn", "ManifestRenderer"]


class ChecksumFn(Protocol):
    """Return the hex SHA-256 digest of an artifact (local path or URL)."""

    def __call__(self, source: Path | str) -> str: ...


class ManifestRenderer(Protocol):
    """Render a packaging manifest from a field set."""

    def __call__(self, fields: Mapping[str, str]) -> str: ...


class ArtifactSigner(Protocol):
    """Sign (and possibly notarize) an artifact, returning the signed file."""

    def __call__(self, artifact: Path, credentials: Mapping[str, str]) -> Path: ...
