"""HTTP client abstraction for the release archive download.

This module provides:
- HttpClient: Protocol for downloads (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: In-memory implementation for testing
"""

from __future__ import annotations

import http.client
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from bcr.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for streaming a URL to a local file."""

    def download(self, url: str, dest: Path) -> Result[int, HttpError]:
        """Download url into dest.

        Returns:
            Ok with the number of bytes written, or Err with HttpError
        """
        ...


class RealHttpClient:
    """HTTPS client using urllib with system certificates and a timeout.

    Redirects are followed (GitHub archive URLs redirect to codeload).
    """

    chunk_size = 64 * 1024

    def __init__(self, timeout: float = 30.0, user_agent: str = "create-bcr-entry") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def download(self, url: str, dest: Path) -> Result[int, HttpError]:
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                written = 0
                with open(dest, "wb") as f:
                    while True:
                        chunk = response.read(self.chunk_size)
                        if not chunk:
                            break
                        f.write(chunk)
                        written += len(chunk)
                return Ok(written)
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except http.client.HTTPException as e:
            return Err(HttpError(url=url, status=0, message=f"incomplete response: {e!r}"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_download("https://example.com/a.tar.gz", b"payload")
        client.download("https://example.com/a.tar.gz", dest)
    """

    def __init__(self) -> None:
        self._responses: dict[str, bytes | HttpError] = {}
        self.calls: list[str] = []
        self.destinations: list[Path] = []

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._responses[url] = response

    def download(self, url: str, dest: Path) -> Result[int, HttpError]:
        self.calls.append(url)
        self.destinations.append(dest)

        if url not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.write_bytes(response)
        return Ok(len(response))
