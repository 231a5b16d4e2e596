"""Zip extraction and compression.

Extraction is hardened against hostile archives: absolute paths, `..`
components, drive prefixes and symlink entries are skipped. Compression
writes each file of a directory tree exactly once, in sorted order, under
a single top-level folder.
"""

from __future__ import annotations

import shutil
import stat
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from sgpack.core.result import Err, Ok, Result

__all__ = ["ArchiveError", "extract_zip", "zip_directory"]


@dataclass(frozen=True, slots=True)
class ArchiveError:
    """Archive error details.

    Attributes:
        archive: Path to the archive that failed
        message: Human-readable error message
    """

    archive: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.archive}"


def _safe_relative_path(member_name: str) -> Path | None:
    """Return a sanitized relative extraction path, or None if unsafe."""
    normalized = member_name.replace("\\", "/")
    if normalized.startswith("/"):
        return None

    parts = PurePosixPath(normalized).parts
    if not parts:
        return None
    if any(part in {"", ".", ".."} for part in parts):
        return None
    if parts[0].endswith(":"):
        return None

    return Path(*parts)


def _is_within_root(root: Path, target: Path) -> bool:
    try:
        return target.resolve().is_relative_to(root)
    except OSError:
        return False


def extract_zip(archive: Path, dest_dir: Path) -> Result[int, ArchiveError]:
    """Extract a zip archive into dest_dir.

    Returns:
        Ok with the number of files written, or Err with ArchiveError
    """
    if not archive.is_file():
        return Err(ArchiveError(archive=archive, message="Archive not found"))

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        root = dest_dir.resolve()
        files_count = 0

        with zipfile.ZipFile(archive, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue

                rel_path = _safe_relative_path(info.filename)
                if rel_path is None:
                    continue

                mode = info.external_attr >> 16
                if stat.S_IFMT(mode) == stat.S_IFLNK:
                    continue

                target = dest_dir / rel_path
                if not _is_within_root(root, target):
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)

                files_count += 1

        return Ok(files_count)

    except zipfile.BadZipFile as e:
        return Err(ArchiveError(archive=archive, message=f"Invalid zip file: {e}"))
    except OSError as e:
        return Err(ArchiveError(archive=archive, message=f"IO error: {e}"))


def _collect_files(base_dir: Path, arc_prefix: str) -> list[tuple[Path, str]]:
    out: list[tuple[Path, str]] = []
    for p in sorted(base_dir.rglob("*")):
        if p.is_dir():
            continue
        rel = p.relative_to(base_dir).as_posix()
        out.append((p, f"{arc_prefix}/{rel}"))
    return out


def zip_directory(source_dir: Path, zip_path: Path) -> Result[int, ArchiveError]:
    """Compress source_dir (the folder itself and its contents) into zip_path.

    Entries are stored as `<source_dir.name>/<relative path>`. A partially
    written archive is removed on failure.

    Returns:
        Ok with the number of files stored, or Err with ArchiveError
    """
    if not source_dir.is_dir():
        return Err(
            ArchiveError(archive=zip_path, message=f"Source directory missing: {source_dir}")
        )

    try:
        files = _collect_files(source_dir, source_dir.name)
        zip_path.parent.mkdir(parents=True, exist_ok=True)
        # Build outputs may carry mtime=0; ZIP cannot store timestamps before 1980.
        with zipfile.ZipFile(
            zip_path, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
        ) as zf:
            for src, arc in files:
                zf.write(src, arcname=arc)
        return Ok(len(files))
    except OSError as e:
        zip_path.unlink(missing_ok=True)
        return Err(ArchiveError(archive=zip_path, message=f"IO error: {e}"))
