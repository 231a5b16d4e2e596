"""Error presentation utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sgpack.core.errors import ErrorCode
from sgpack.output.console import Style
from sgpack.services.package_errors import (
    ArchiveFailed,
    CopyFailed,
    DownloadFailed,
    ExtractFailed,
    OutputMissing,
    OutputPathExhausted,
    PackageError,
    ProjectFileMissing,
    StagingFailed,
    ToolFailed,
)

if TYPE_CHECKING:
    from sgpack.output.console import ConsoleProtocol

__all__ = ["print_package_error", "package_error_exit_code"]


def print_package_error(error: PackageError, console: ConsoleProtocol) -> None:
    """Print a packaging error with appropriate formatting."""
    match error:
        case OutputPathExhausted(directory=directory, base=base, limit=limit):
            console.error(f"no free archive name for {base} in {directory} (tried up to _{limit})")
        case StagingFailed(path=path, reason=reason):
            console.error(f"cannot prepare staging tree {path}: {reason}")
        case ToolFailed(tool=tool, returncode=rc, detail=detail):
            console.error(f"{tool} failed (exit {rc})")
            if detail:
                console.print(detail, Style.DIM)
        case ProjectFileMissing(path=path, hint=hint):
            console.error(f"not found: {path}")
            console.print(f"hint: {hint}", Style.DIM)
        case OutputMissing(path=path):
            console.error(f"output not found: {path}")
        case CopyFailed(src=src, dst=dst, reason=reason):
            console.error(f"cannot copy {src} -> {dst}: {reason}")
        case DownloadFailed(url=url, status=status, message=message):
            prefix = f"HTTP {status}: " if status else ""
            console.error(f"download failed: {prefix}{message} ({url})")
        case ExtractFailed(archive=archive, message=message):
            console.error(f"cannot extract {archive}: {message}")
        case ArchiveFailed(path=path, message=message):
            console.error(f"cannot write archive {path}: {message}")


def package_error_exit_code(error: PackageError) -> int:
    """Every packaging failure maps to the same exit code."""
    return int(ErrorCode.FAILED)
