from __future__ import annotations

from pathlib import Path

import typer

from sgpack import __version__
from sgpack.cli.context import build_context
from sgpack.core.errors import ErrorCode
from sgpack.core.result import Err
from sgpack.output.errors import package_error_exit_code, print_package_error
from sgpack.services.packager import ReleasePackager

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KiB", "MiB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


@app.command()
def package(
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (overrides $SGPACK_ROOT and auto detection)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <root>/sgpack.toml if present)",
    ),
) -> None:
    """Build the SGLoader release archive into dist/."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    ctx = build_context(root=root, config_path=config)
    packager = ReleasePackager(
        project=ctx.project,
        config=ctx.config,
        console=ctx.console,
        http=ctx.http,
    )

    result = packager.run()
    if isinstance(result, Err):
        print_package_error(result.error, ctx.console)
        raise typer.Exit(code=package_error_exit_code(result.error))

    done = result.value
    ctx.console.success(
        f"{done.archive} ({done.files} files, {_format_size(done.size)}, sha256 {done.sha256})"
    )


def main() -> None:
    app()
