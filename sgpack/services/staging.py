"""Staging tree layout and reset.

The staging tree is always rebuilt from nothing:

    <root>/
        <dist_name>.exe
        bin/<dist_name>.pdb                 (optional)
        dependencies/loader/<runtime_id>/   published loader + signing_key
        dependencies/dotnet/                extracted .NET runtime
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sgpack.core.result import Err, Ok, Result
from sgpack.platform.files import remove_tree
from sgpack.services.package_errors import StagingFailed

SIGNING_KEY_NAME = "signing_key"


@dataclass(frozen=True, slots=True)
class StagingLayout:
    """Paths inside one staging tree."""

    root: Path
    dist_name: str
    runtime_id: str

    @property
    def binary_path(self) -> Path:
        return self.root / f"{self.dist_name}.exe"

    @property
    def bin_dir(self) -> Path:
        return self.root / "bin"

    @property
    def symbols_path(self) -> Path:
        return self.bin_dir / f"{self.dist_name}.pdb"

    @property
    def dependencies_dir(self) -> Path:
        return self.root / "dependencies"

    @property
    def loader_dir(self) -> Path:
        return self.dependencies_dir / "loader" / self.runtime_id

    @property
    def signing_key_path(self) -> Path:
        return self.loader_dir / SIGNING_KEY_NAME

    @property
    def dotnet_dir(self) -> Path:
        return self.dependencies_dir / "dotnet"

    def directories(self) -> tuple[Path, ...]:
        """Directories that exist in a freshly reset tree, parents first."""
        return (
            self.root,
            self.bin_dir,
            self.dependencies_dir,
            self.loader_dir,
            self.dotnet_dir,
        )


def reset_staging_tree(layout: StagingLayout) -> Result[StagingLayout, StagingFailed]:
    """Delete the staging root if present and recreate the empty layout."""
    removed = remove_tree(layout.root)
    if isinstance(removed, Err):
        return Err(StagingFailed(path=removed.error.path, reason=removed.error.message))

    for directory in layout.directories():
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(StagingFailed(path=directory, reason=str(e)))

    return Ok(layout)
