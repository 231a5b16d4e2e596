"""HTTP client abstraction for the runtime download.

This module provides:
- HttpClient: Protocol for downloads (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sgpack import __version__
from sgpack.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable

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
    """Protocol for HTTP downloads."""

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Download URL to file.

        Args:
            url: URL to download
            dest: Destination path
            progress: Optional callback(downloaded, total) for progress

        Returns:
            Ok with dest path, or Err with HttpError
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates.

    No timeout is applied unless one is given: a stalled transfer blocks
    the run, like every other step.
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = f"sgpack/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Download URL to file with optional progress callback."""
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                total = int(response.headers.get("Content-Length", 0))
                downloaded = 0
                chunk_size = 64 * 1024

                dest.parent.mkdir(parents=True, exist_ok=True)

                with open(dest, "wb") as f:
                    while True:
                        chunk = response.read(chunk_size)
                        if not chunk:
                            break
                        f.write(chunk)
                        downloaded += len(chunk)
                        if progress:
                            progress(downloaded, total)

                return Ok(dest)

        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_download("https://example.com/runtime.zip", b"...")
        result = client.download("https://example.com/runtime.zip", dest)
    """

    def __init__(self) -> None:
        self._download_responses: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, Path]] = []

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        """Set download content (or failure) for URL."""
        self._download_responses[url] = response

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Mock download - writes predefined content to dest."""
        self.calls.append((url, dest))

        if url not in self._download_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._download_responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)

        if progress:
            progress(len(response), len(response))

        return Ok(dest)
