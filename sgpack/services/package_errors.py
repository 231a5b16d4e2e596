from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class OutputPathExhausted:
    directory: Path
    base: str
    limit: int


@dataclass(frozen=True, slots=True)
class StagingFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ToolFailed:
    tool: str
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ProjectFileMissing:
    path: Path
    hint: str


@dataclass(frozen=True, slots=True)
class OutputMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class CopyFailed:
    src: Path
    dst: Path
    reason: str


@dataclass(frozen=True, slots=True)
class DownloadFailed:
    url: str
    status: int
    message: str


@dataclass(frozen=True, slots=True)
class ExtractFailed:
    archive: Path
    message: str


@dataclass(frozen=True, slots=True)
class ArchiveFailed:
    path: Path
    message: str


PackageError = (
    OutputPathExhausted
    | StagingFailed
    | ToolFailed
    | ProjectFileMissing
    | OutputMissing
    | CopyFailed
    | DownloadFailed
    | ExtractFailed
    | ArchiveFailed
)
