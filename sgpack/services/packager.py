"""Release packaging for the SGLoader launcher.

Runs the release steps strictly in order and stops at the first failure:

1. reset the staging tree
2. sync the loader submodule
3. compile the launcher (cargo)
4. stage the launcher binary and its debug symbols
5. publish the managed loader (dotnet) and copy its signing key
6. fetch the .NET runtime, extract it, and zip the staging tree

A failed run leaves the staging tree as it is; the next run wipes it in
step 1. The output archive is only written by the last step, so a failed
run never creates or touches an archive.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from sgpack.core.config import PackagerConfig
from sgpack.core.project import Project
from sgpack.core.result import Err, Ok, Result
from sgpack.output.console import ConsoleProtocol
from sgpack.platform.files import copy_file, remove_tree
from sgpack.platform.process import Runner, run_silent
from sgpack.services.output_path import resolve_output_path
from sgpack.services.package_errors import (
    ArchiveFailed,
    CopyFailed,
    DownloadFailed,
    ExtractFailed,
    OutputMissing,
    PackageError,
    ProjectFileMissing,
    StagingFailed,
    ToolFailed,
)
from sgpack.services.staging import StagingLayout, reset_staging_tree
from sgpack.tools.archive import extract_zip, zip_directory
from sgpack.tools.http import HttpClient

STEP_COUNT = 6

LOADER_ENTRYPOINTS = ("SS14.Loader.exe", "SS14.Loader.dll")

type StepResult = Result[None, PackageError]


@dataclass(frozen=True, slots=True)
class PackageResult:
    archive: Path
    files: int
    size: int
    sha256: str


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


class ReleasePackager:
    """Builds one release archive for a project checkout.

    External collaborators are injected: `runner` executes git, cargo and
    dotnet, `http` fetches the runtime archive.
    """

    def __init__(
        self,
        *,
        project: Project,
        config: PackagerConfig,
        console: ConsoleProtocol,
        http: HttpClient,
        runner: Runner = run_silent,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._http = http
        self._runner = runner
        self._layout = StagingLayout(
            root=self.dist_dir / config.dist_name,
            dist_name=config.dist_name,
            runtime_id=config.runtime_id,
        )

    @property
    def dist_dir(self) -> Path:
        return self._project.path(self._config.dist_dir)

    @property
    def layout(self) -> StagingLayout:
        return self._layout

    def run(self) -> Result[PackageResult, PackageError]:
        """Run every step and return the written archive."""
        resolved = resolve_output_path(
            self.dist_dir, self._config.dist_name, limit=self._config.max_suffix
        )
        if isinstance(resolved, Err):
            return resolved
        archive_path = resolved.value
        self._console.info(f"output archive: {archive_path}")

        steps: tuple[tuple[str, Callable[[], StepResult]], ...] = (
            ("Resetting staging tree", self.reset_staging),
            ("Syncing loader submodule", self.sync_dependencies),
            ("Compiling launcher", self.compile),
            ("Staging launcher binary", self.stage_binary),
            ("Publishing loader", self.publish_loader),
        )
        for index, (label, step) in enumerate(steps, start=1):
            self._console.step(index, STEP_COUNT, label)
            result = step()
            if isinstance(result, Err):
                return result

        self._console.step(STEP_COUNT, STEP_COUNT, "Fetching .NET runtime and packaging")
        return self.fetch_runtime_and_package(archive_path)

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def reset_staging(self) -> StepResult:
        result = reset_staging_tree(self._layout)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def sync_dependencies(self) -> StepResult:
        """Check out the pinned loader submodule and verify its projects exist."""
        submodule = self._config.submodule
        synced = self._run_tool(
            "git", ["git", "submodule", "update", "--init", "--recursive", submodule]
        )
        if isinstance(synced, Err):
            return synced

        # The loader build fails with confusing namespace errors when the nested
        # LoaderApi submodule is missing, so check for it up front.
        for relative in (self._config.loader_project, self._config.loader_api_project):
            path = self._project.path(relative)
            if not path.is_file():
                return Err(
                    ProjectFileMissing(
                        path=path,
                        hint=f"git submodule update --init --recursive {submodule}",
                    )
                )
        return Ok(None)

    def compile(self) -> StepResult:
        built = self._run_tool("cargo", ["cargo", "build", "--release"])
        if isinstance(built, Err):
            return built

        binary = self._project.path(self._config.binary)
        if not binary.is_file():
            return Err(OutputMissing(path=binary))
        return Ok(None)

    def stage_binary(self) -> StepResult:
        """Copy the launcher binary to the staging root; symbols are optional."""
        binary = self._project.path(self._config.binary)
        copied = copy_file(binary, self._layout.binary_path)
        if isinstance(copied, Err):
            return Err(
                CopyFailed(src=binary, dst=self._layout.binary_path, reason=copied.error.message)
            )

        symbols = self._project.path(self._config.symbols)
        if symbols.is_file():
            sym_copied = copy_file(symbols, self._layout.symbols_path)
            if isinstance(sym_copied, Err):
                self._console.warning(f"debug symbols not staged: {sym_copied.error}")
        return Ok(None)

    def publish_loader(self) -> StepResult:
        """Publish the self-contained loader and place the signing key next to it."""
        cfg = self._config
        loader_dir = self._layout.loader_dir
        published = self._run_tool(
            "dotnet publish",
            [
                "dotnet",
                "publish",
                str(self._project.path(cfg.loader_project)),
                "-c",
                cfg.configuration,
                "-r",
                cfg.runtime_id,
                "--self-contained",
                "true",
                "-o",
                str(loader_dir),
            ],
        )
        if isinstance(published, Err):
            return published

        if not any((loader_dir / name).is_file() for name in LOADER_ENTRYPOINTS):
            return Err(OutputMissing(path=loader_dir / LOADER_ENTRYPOINTS[0]))

        key_src = self._project.path(cfg.signing_key)
        key_dst = self._layout.signing_key_path
        copied = copy_file(key_src, key_dst)
        if isinstance(copied, Err):
            return Err(CopyFailed(src=key_src, dst=key_dst, reason=copied.error.message))
        return Ok(None)

    def fetch_runtime_and_package(self, archive_path: Path) -> Result[PackageResult, PackageError]:
        """Download and unpack the runtime, then zip the whole staging tree."""
        cfg = self._config
        url = cfg.runtime_url
        download_path = self.dist_dir / cfg.runtime_archive_name

        downloaded = self._http.download(url, download_path)
        if isinstance(downloaded, Err):
            remove_tree(download_path)
            error = downloaded.error
            return Err(DownloadFailed(url=url, status=error.status, message=error.message))

        extracted = extract_zip(download_path, self._layout.dotnet_dir)
        removed = remove_tree(download_path)
        if isinstance(extracted, Err):
            return Err(ExtractFailed(archive=download_path, message=extracted.error.message))
        if isinstance(removed, Err):
            return Err(StagingFailed(path=download_path, reason=removed.error.message))

        zipped = zip_directory(self._layout.root, archive_path)
        if isinstance(zipped, Err):
            return Err(ArchiveFailed(path=archive_path, message=zipped.error.message))

        return Ok(
            PackageResult(
                archive=archive_path,
                files=zipped.value,
                size=archive_path.stat().st_size,
                sha256=_sha256_file(archive_path),
            )
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _run_tool(self, tool: str, cmd: list[str]) -> StepResult:
        result = self._runner(cmd, self._project.root)
        if isinstance(result, Err):
            error = result.error
            return Err(ToolFailed(tool=tool, returncode=error.returncode, detail=error.stderr))
        return Ok(None)
