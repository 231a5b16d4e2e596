"""Tests for sgpack.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from sgpack.core.errors import ErrorCode
from sgpack.output.console import MockConsole, Style
from sgpack.output.errors import package_error_exit_code, print_package_error
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

ALL_ERRORS: list[PackageError] = [
    OutputPathExhausted(directory=Path("dist"), base="SGLoader-V2", limit=9999),
    StagingFailed(path=Path("dist/SGLoader-V2"), reason="locked"),
    ToolFailed(tool="git", returncode=128),
    ProjectFileMissing(path=Path("x.csproj"), hint="git submodule update --init"),
    OutputMissing(path=Path("target/release/sgloader-v2.exe")),
    CopyFailed(src=Path("a"), dst=Path("b"), reason="source file not found"),
    DownloadFailed(url="https://example.com/r.zip", status=404, message="Not Found"),
    ExtractFailed(archive=Path("r.zip"), message="Invalid zip file"),
    ArchiveFailed(path=Path("out.zip"), message="disk full"),
]


@pytest.mark.parametrize("error", ALL_ERRORS)
def test_every_error_prints_one_error_line(error: PackageError) -> None:
    console = MockConsole()

    print_package_error(error, console)

    assert sum(1 for o in console.outputs if o.style == Style.ERROR) == 1


@pytest.mark.parametrize("error", ALL_ERRORS)
def test_every_error_exits_with_failure(error: PackageError) -> None:
    assert package_error_exit_code(error) == int(ErrorCode.FAILED) == 1


def test_tool_failure_message() -> None:
    console = MockConsole()

    print_package_error(ToolFailed(tool="cargo", returncode=101, detail=""), console)

    assert console.messages == ["error: cargo failed (exit 101)"]


def test_project_file_missing_prints_hint() -> None:
    console = MockConsole()

    print_package_error(
        ProjectFileMissing(path=Path("api.csproj"), hint="git submodule update"), console
    )

    assert console.find("hint: git submodule update")


def test_download_failure_includes_status() -> None:
    console = MockConsole()

    print_package_error(
        DownloadFailed(url="https://example.com/r.zip", status=404, message="Not Found"), console
    )

    assert console.messages == [
        "error: download failed: HTTP 404: Not Found (https://example.com/r.zip)"
    ]
