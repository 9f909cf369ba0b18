"""Resolution of the four positional inputs into an ``EntryRequest``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import EntryError
from .result import Err, Ok, Result

__all__ = ["EntryRequest", "USAGE", "normalize_version", "split_owner_repo", "resolve_request"]

USAGE = "usage: create-bcr-entry [project_path] [bcr_path] [owner_slash_repo] [version]"


@dataclass(frozen=True, slots=True)
class EntryRequest:
    project_path: Path
    bcr_path: Path
    owner_slash_repo: str
    version: str


def normalize_version(version: str) -> str:
    """Strip one leading ``v`` from a release tag.

    Tags without the prefix are returned unchanged.
    """
    if version.startswith("v"):
        return version[1:]
    return version


def split_owner_repo(owner_slash_repo: str) -> tuple[str, str]:
    owner, _, repo = owner_slash_repo.partition("/")
    return owner, repo


def _check_owner_repo(owner_slash_repo: str) -> EntryError | None:
    owner, sep, repo = owner_slash_repo.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        return EntryError(
            "usage",
            f"invalid owner/repo identifier: {owner_slash_repo!r}",
            hint="expected <owner>/<repo>, e.g. aspect-build/bazel-lib",
        )
    return None


def _check_version(raw: str, version: str) -> EntryError | None:
    if not version:
        return EntryError("usage", f"invalid version: {raw!r}", hint="expected e.g. v1.2.3")
    if "/" in version or "\\" in version or version in (".", ".."):
        return EntryError("usage", f"version cannot be used as a directory name: {raw!r}")
    return None


def resolve_request(argv: Sequence[str]) -> Result[EntryRequest, EntryError]:
    """Validate exactly four positional arguments and normalize them."""
    if len(argv) != 4:
        return Err(EntryError("usage", USAGE))

    project_path, bcr_path, owner_slash_repo, raw_version = argv
    version = normalize_version(raw_version)

    error = _check_owner_repo(owner_slash_repo) or _check_version(raw_version, version)
    if error is not None:
        return Err(error)

    return Ok(
        EntryRequest(
            project_path=Path(project_path),
            bcr_path=Path(bcr_path),
            owner_slash_repo=owner_slash_repo,
            version=version,
        )
    )
