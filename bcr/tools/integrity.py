"""Release archive download and Subresource-Integrity style hashing."""

from __future__ import annotations

import base64
import hashlib
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bcr.core.errors import EntryError
from bcr.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from bcr.tools.http import HttpClient

__all__ = ["ArchiveDigest", "fetch_archive_digest", "sha256_base64"]


@dataclass(frozen=True, slots=True)
class ArchiveDigest:
    """Digest of a downloaded archive.

    Attributes:
        url: Where the archive came from
        digest: Base64 SHA-256 of the archive bytes
        size: Archive size in bytes
    """

    url: str
    digest: str
    size: int

    @property
    def integrity(self) -> str:
        return f"sha256-{self.digest}"


def sha256_base64(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        while True:
            chunk = f.read(1024 * 1024)
            if not chunk:
                break
            h.update(chunk)
    return base64.b64encode(h.digest()).decode("ascii")


def fetch_archive_digest(http: HttpClient, url: str) -> Result[ArchiveDigest, EntryError]:
    """Download url to a scratch directory and hash it.

    The scratch directory is removed on every exit path.
    """
    with tempfile.TemporaryDirectory(prefix="create-bcr-entry-") as tmp:
        dest = Path(tmp) / "artifact.tar.gz"
        result = http.download(url, dest)
        if isinstance(result, Err):
            return Err(
                EntryError(
                    "network",
                    f"failed to download release archive: {result.error}",
                    hint="check that the release tag has been pushed",
                )
            )
        try:
            digest = sha256_base64(dest)
        except OSError as e:
            return Err(EntryError("filesystem", f"cannot read downloaded archive: {e}"))
        return Ok(ArchiveDigest(url=url, digest=digest, size=result.value))
