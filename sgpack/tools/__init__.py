"""Network and archive collaborators."""

from .archive import ArchiveError, extract_zip, zip_directory
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = [
    "ArchiveError",
    "extract_zip",
    "zip_directory",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]
