"""Tests for manifest version reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from nextver.exceptions import ProjectError, VersionNotFoundError
from nextver.project.manifest import (
    find_manifest_version,
    get_manifest_version,
    get_package_json_version,
    get_pyproject_version,
    read_manifest_version,
)


class TestGetPyprojectVersion:
    """Tests for get_pyproject_version()."""

    def test_pep621(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\nversion = "1.2.3"\n')

        assert get_pyproject_version(path) == "1.2.3"

    def test_pep621_after_arrays(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "demo"\ndependencies = [\n    "rich",\n]\nversion = \'2.0.0\'\n'
        )

        assert get_pyproject_version(path) == "2.0.0"

    def test_poetry(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.poetry]\nname = "demo"\nversion = "0.4.0"\n')

        assert get_pyproject_version(path) == "0.4.0"

    def test_version_in_other_section_is_ignored(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\n\n[tool.other]\nversion = "9.9.9"\n')

        with pytest.raises(VersionNotFoundError):
            get_pyproject_version(path)


class TestGetPackageJsonVersion:
    """Tests for get_package_json_version()."""

    def test_version(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo", "version": "3.1.4"}')

        assert get_package_json_version(path) == "3.1.4"

    def test_malformed(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("{not json")

        with pytest.raises(VersionNotFoundError):
            get_package_json_version(path)

    def test_missing_field(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo"}')

        with pytest.raises(VersionNotFoundError):
            get_package_json_version(path)


class TestReadManifestVersion:
    """Tests for read_manifest_version() and friends."""

    def test_pyproject_first(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "1.0.0"\n')
        (tmp_path / "package.json").write_text('{"version": "2.0.0"}')

        assert read_manifest_version(tmp_path) == "1.0.0"

    def test_package_json_fallback(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "no-version"\n')
        (tmp_path / "package.json").write_text('{"version": "2.0.0"}')

        assert read_manifest_version(tmp_path) == "2.0.0"

    def test_default_when_missing(self, tmp_path: Path):
        assert read_manifest_version(tmp_path) == "0.0.0"
        assert read_manifest_version(tmp_path, default="0.1.0") == "0.1.0"

    def test_default_when_malformed(self, tmp_path: Path):
        (tmp_path / "package.json").write_text("{broken")

        assert read_manifest_version(tmp_path) == "0.0.0"

    def test_unreadable_manifest_raises(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").mkdir()

        with pytest.raises(ProjectError):
            read_manifest_version(tmp_path)

    def test_find_returns_none(self, tmp_path: Path):
        assert find_manifest_version(tmp_path) is None

    def test_get_requires_version(self, tmp_path: Path):
        with pytest.raises(VersionNotFoundError):
            get_manifest_version(tmp_path)
