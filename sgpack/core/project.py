"""Project root detection.

The project root is the checkout of the launcher being packaged: the
directory holding `Cargo.toml`, the `third_party/` submodules and the
`dist/` output directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILE_NAME
from .result import Err, Ok, Result

__all__ = ["Project", "ProjectError", "detect_project", "ROOT_ENV_VAR"]

ROOT_ENV_VAR = "SGPACK_ROOT"
MARKER_FILE = "Cargo.toml"


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be determined."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A detected launcher checkout."""

    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    def path(self, relative: str) -> Path:
        """Resolve a config-relative path against the project root."""
        return self.root / relative


def detect_project(start: Path | None = None) -> Result[Project, ProjectError]:
    """Find the project root.

    Order: $SGPACK_ROOT, then the nearest ancestor of `start` (default: cwd)
    containing Cargo.toml, then `start` itself.
    """
    env = os.environ.get(ROOT_ENV_VAR)
    if env:
        root = Path(env).expanduser()
        if not root.is_dir():
            return Err(ProjectError(f"{ROOT_ENV_VAR} is not a directory: {root}"))
        return Ok(Project(root=root.resolve()))

    try:
        cwd = (start or Path.cwd()).resolve()
    except OSError as e:
        return Err(ProjectError(f"Cannot resolve working directory: {e}"))

    for candidate in (cwd, *cwd.parents):
        if (candidate / MARKER_FILE).is_file():
            return Ok(Project(root=candidate))

    return Ok(Project(root=cwd))
