"""Tests for sgpack.core.project module."""

from __future__ import annotations

from pathlib import Path

import pytest

from sgpack.core.project import ROOT_ENV_VAR, Project, detect_project
from sgpack.core.result import Err, Ok


class TestDetectProject:
    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))

        result = detect_project(tmp_path / "elsewhere")

        assert result == Ok(Project(root=tmp_path.resolve()))

    def test_env_var_not_a_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path / "missing"))

        result = detect_project()

        assert isinstance(result, Err)
        assert ROOT_ENV_VAR in result.error.message

    def test_finds_cargo_toml_upwards(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
        (tmp_path / "Cargo.toml").write_text("[package]\n", encoding="utf-8")
        nested = tmp_path / "src" / "core"
        nested.mkdir(parents=True)

        result = detect_project(nested)

        assert isinstance(result, Ok)
        assert result.value.root == tmp_path.resolve()

    def test_falls_back_to_start(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)

        result = detect_project(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.root == tmp_path.resolve()


class TestProject:
    def test_paths(self, tmp_path: Path) -> None:
        project = Project(root=tmp_path)
        assert project.config_path == tmp_path / "sgpack.toml"
        assert project.path("dist") == tmp_path / "dist"
