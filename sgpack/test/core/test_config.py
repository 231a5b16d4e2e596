"""Tests for sgpack.core.config module."""

from __future__ import annotations

from pathlib import Path

from sgpack.core.config import (
    PackagerConfig,
    load_config,
    load_config_or_default,
)
from sgpack.core.result import Err, Ok


class TestDefaults:
    def test_dist_name(self) -> None:
        assert PackagerConfig().dist_name == "SGLoader-V2"

    def test_runtime_url(self) -> None:
        config = PackagerConfig()
        assert config.runtime_url == (
            "https://builds.dotnet.microsoft.com/dotnet/Runtime/10.0.0/"
            "dotnet-runtime-10.0.0-win-x64.zip"
        )
        assert config.runtime_archive_name == "dotnet-runtime-10.0.0-win-x64.zip"

    def test_loader_paths_under_submodule(self) -> None:
        config = PackagerConfig()
        assert config.loader_project.startswith(config.submodule + "/")
        assert config.signing_key.endswith("SS14.Launcher/signing_key")


class TestFromDict:
    def test_empty_uses_defaults(self) -> None:
        assert PackagerConfig.from_dict({}) == PackagerConfig()

    def test_overrides(self) -> None:
        config = PackagerConfig.from_dict(
            {
                "dist": {"product": "Demo", "version": "V3", "dir": "out", "max_suffix": 5},
                "runtime": {"version": "9.0.4", "host": "mirror.example.com"},
                "loader": {"runtime_id": "win-arm64"},
            }
        )
        assert config.dist_name == "Demo-V3"
        assert config.dist_dir == "out"
        assert config.max_suffix == 5
        assert config.runtime_url == (
            "https://mirror.example.com/dotnet/Runtime/9.0.4/dotnet-runtime-9.0.4-win-arm64.zip"
        )

    def test_submodule_override_moves_loader_paths(self) -> None:
        config = PackagerConfig.from_dict({"sources": {"submodule": "vendor/loader"}})
        assert config.loader_project == "vendor/loader/SS14.Loader/SS14.Loader.csproj"
        assert config.signing_key == "vendor/loader/SS14.Launcher/signing_key"
        assert config.loader_api_project.startswith("vendor/loader/Robust.LoaderApi/")

    def test_blank_strings_fall_back(self) -> None:
        config = PackagerConfig.from_dict({"dist": {"product": "   "}})
        assert config.product == "SGLoader"


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sgpack.toml"
        path.write_text('[runtime]\nversion = "9.0.1"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.runtime_version == "9.0.1"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "sgpack.toml"
        path.write_text("[dist\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_max_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "sgpack.toml"
        path.write_text("[dist]\nmax_suffix = 0\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "max_suffix" in result.error.message

    def test_or_default_when_missing(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "sgpack.toml")

        assert result == Ok(PackagerConfig())

    def test_or_default_still_reports_broken_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sgpack.toml"
        path.write_text("not = [valid", encoding="utf-8")

        assert isinstance(load_config_or_default(path), Err)
