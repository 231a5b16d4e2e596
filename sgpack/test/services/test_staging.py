"""Tests for sgpack.services.staging module."""

from __future__ import annotations

from pathlib import Path

from sgpack.core.result import Err, Ok
from sgpack.services.staging import StagingLayout, reset_staging_tree


def _layout(root: Path) -> StagingLayout:
    return StagingLayout(root=root, dist_name="SGLoader-V2", runtime_id="win-x64")


def _snapshot(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() + ("/" if p.is_dir() else "") for p in root.rglob("*")}


class TestStagingLayout:
    def test_paths(self, tmp_path: Path) -> None:
        layout = _layout(tmp_path / "SGLoader-V2")

        assert layout.binary_path == tmp_path / "SGLoader-V2" / "SGLoader-V2.exe"
        assert layout.symbols_path == tmp_path / "SGLoader-V2" / "bin" / "SGLoader-V2.pdb"
        assert layout.loader_dir == (
            tmp_path / "SGLoader-V2" / "dependencies" / "loader" / "win-x64"
        )
        assert layout.signing_key_path == layout.loader_dir / "signing_key"
        assert layout.dotnet_dir == tmp_path / "SGLoader-V2" / "dependencies" / "dotnet"


class TestResetStagingTree:
    def test_creates_layout(self, tmp_path: Path) -> None:
        layout = _layout(tmp_path / "dist" / "SGLoader-V2")

        result = reset_staging_tree(layout)

        assert result == Ok(layout)
        assert _snapshot(layout.root) == {
            "bin/",
            "dependencies/",
            "dependencies/loader/",
            "dependencies/loader/win-x64/",
            "dependencies/dotnet/",
        }

    def test_second_run_discards_junk(self, tmp_path: Path) -> None:
        layout = _layout(tmp_path / "dist" / "SGLoader-V2")
        assert isinstance(reset_staging_tree(layout), Ok)
        first = _snapshot(layout.root)

        (layout.root / "stale.exe").write_bytes(b"old")
        (layout.bin_dir / "old.pdb").write_bytes(b"old")
        (layout.loader_dir / "SS14.Loader.dll").write_bytes(b"old")
        (layout.dotnet_dir / "host" / "fxr").mkdir(parents=True)
        (layout.dotnet_dir / "host" / "fxr" / "hostfxr.dll").write_bytes(b"old")
        (layout.root / "extra").mkdir()

        assert isinstance(reset_staging_tree(layout), Ok)

        assert _snapshot(layout.root) == first

    def test_leaves_siblings_alone(self, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        dist.mkdir()
        (dist / "SGLoader-V2.zip").write_bytes(b"previous release")
        layout = _layout(dist / "SGLoader-V2")

        assert isinstance(reset_staging_tree(layout), Ok)

        assert (dist / "SGLoader-V2.zip").read_bytes() == b"previous release"

    def test_replaces_file_at_root(self, tmp_path: Path) -> None:
        root = tmp_path / "SGLoader-V2"
        root.write_bytes(b"not a directory")

        assert isinstance(reset_staging_tree(_layout(root)), Ok)
        assert root.is_dir()

    def test_failure_is_reported(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"file where a directory should be")
        layout = _layout(blocker / "SGLoader-V2")

        result = reset_staging_tree(layout)

        assert isinstance(result, Err)
        assert result.error.path == layout.root
