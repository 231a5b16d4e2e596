"""Filesystem helpers that report failures as values."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from sgpack.core.result import Err, Ok, Result

__all__ = ["FileError", "copy_file", "remove_tree"]


@dataclass(frozen=True, slots=True)
class FileError:
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


def remove_tree(path: Path) -> Result[None, FileError]:
    """Delete a directory tree. A missing path is not an error."""
    if not path.exists() and not path.is_symlink():
        return Ok(None)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        return Err(FileError(path=path, message=f"cannot remove ({e.strerror or e})"))
    return Ok(None)


def copy_file(src: Path, dst: Path) -> Result[Path, FileError]:
    """Copy a single file, replacing dst if present."""
    if not src.is_file():
        return Err(FileError(path=src, message="source file not found"))
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except OSError as e:
        return Err(FileError(path=dst, message=f"cannot copy ({e.strerror or e})"))
    return Ok(dst)
