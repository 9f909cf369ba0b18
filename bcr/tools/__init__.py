"""Network access: archive download and hashing."""

from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .integrity import ArchiveDigest, fetch_archive_digest

__all__ = [
    "ArchiveDigest",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "fetch_archive_digest",
]
