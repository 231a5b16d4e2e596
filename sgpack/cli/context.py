from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from sgpack.core.config import PackagerConfig, load_config, load_config_or_default
from sgpack.core.errors import ErrorCode
from sgpack.core.project import Project, detect_project
from sgpack.core.result import Err
from sgpack.output.console import ConsoleProtocol, RichConsole
from sgpack.tools.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: PackagerConfig
    console: ConsoleProtocol
    http: HttpClient


def build_context(*, root: Path | None = None, config_path: Path | None = None) -> CLIContext:
    """Resolve the project and its configuration once, at startup."""
    console = RichConsole()

    if root is not None:
        if not root.is_dir():
            console.error(f"--root is not a directory: {root}")
            raise typer.Exit(code=int(ErrorCode.FAILED))
        project = Project(root=root.resolve())
    else:
        project_result = detect_project()
        if isinstance(project_result, Err):
            console.error(project_result.error.message)
            raise typer.Exit(code=int(ErrorCode.FAILED))
        project = project_result.value

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_config_or_default(project.config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILED))

    return CLIContext(
        project=project,
        config=config_result.value,
        console=console,
        http=RealHttpClient(),
    )
