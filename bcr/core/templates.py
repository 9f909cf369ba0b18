"""Placeholder substitution for the entry templates."""

from __future__ import annotations

from .request import split_owner_repo

__all__ = [
    "VERSION_PLACEHOLDER",
    "REPO_PLACEHOLDER",
    "OWNER_SLASH_REPO_PLACEHOLDER",
    "SHA256_PLACEHOLDER",
    "stamp_module_file",
    "stamp_source_file",
]

VERSION_PLACEHOLDER = "VERSION_PLACEHOLDER"
REPO_PLACEHOLDER = "REPO_PLACEHOLDER"
OWNER_SLASH_REPO_PLACEHOLDER = "OWNER_SLASH_REPO_PLACEHOLDER"
SHA256_PLACEHOLDER = "SHA256_PLACEHOLDER"


def stamp_module_file(content: str, *, owner_slash_repo: str, version: str) -> str:
    """Fill ``MODULE.template.bazel``.

    Every version placeholder is replaced; the repo placeholder only once.
    """
    return content.replace(REPO_PLACEHOLDER, owner_slash_repo, 1).replace(
        VERSION_PLACEHOLDER, version
    )


def stamp_source_file(
    content: str, *, owner_slash_repo: str, version: str, integrity: str
) -> str:
    """Fill ``source.template.json``.

    ``integrity`` is the bare base64 digest; the ``sha256-`` prefix is added
    here. OWNER_SLASH_REPO_PLACEHOLDER ends with REPO_PLACEHOLDER, so it is
    substituted first.
    """
    _, repo = split_owner_repo(owner_slash_repo)
    return (
        content.replace(VERSION_PLACEHOLDER, version)
        .replace(OWNER_SLASH_REPO_PLACEHOLDER, owner_slash_repo, 1)
        .replace(REPO_PLACEHOLDER, repo, 1)
        .replace(SHA256_PLACEHOLDER, f"sha256-{integrity}", 1)
    )
