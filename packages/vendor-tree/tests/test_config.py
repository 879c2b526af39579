# SPDX-License-Identifier: MIT
"""Tests for vendoring configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from vendor_tree.config import (
    DEFAULT_PATTERN,
    ENV_SOURCE_ROOTS,
    VendorConfigError,
    VendorTreeConfig,
)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    path = tmp_path / "work" / "shop"
    path.mkdir(parents=True)
    return path.resolve()


def write_pyproject(project: Path, body: str) -> None:
    (project / "pyproject.toml").write_text(body, encoding="utf-8")


class TestVendorTreeConfigLoad:
    """Tests for VendorTreeConfig.load()."""

    def test_defaults(self, project: Path):
        config = VendorTreeConfig.load(project, environ={})

        assert config.project_dir == project
        assert config.source_roots == [project.parent]
        assert config.pattern == DEFAULT_PATTERN
        assert config.update == []
        assert config.vendor_dir == project / "vendor"

    def test_pyproject_settings(self, project: Path):
        shared = project.parent.parent / "shared"
        write_pyproject(
            project,
            """
[project]
name = "shop"

[tool.vendor-tree]
source-roots = ["..", "../../shared"]
pattern = "./cmd/..."
""",
        )

        config = VendorTreeConfig.load(project, environ={})

        assert config.source_roots == [project.parent, shared.resolve()]
        assert config.pattern == "./cmd/..."

    def test_pyproject_without_table(self, project: Path):
        write_pyproject(project, '[project]\nname = "shop"\n')

        config = VendorTreeConfig.load(project, environ={})

        assert config.source_roots == [project.parent]

    def test_environment_overrides_pyproject(self, project: Path, tmp_path: Path):
        write_pyproject(project, '[tool.vendor-tree]\nsource-roots = [".."]\n')
        first, second = tmp_path / "a", tmp_path / "b"

        config = VendorTreeConfig.load(
            project, environ={ENV_SOURCE_ROOTS: f"{first}{os.pathsep}{os.pathsep}{second}"}
        )

        assert config.source_roots == [first.resolve(), second.resolve()]

    def test_command_line_overrides_environment(self, project: Path, tmp_path: Path):
        cli_root = tmp_path / "cli"

        config = VendorTreeConfig.load(
            project,
            source_roots=[cli_root],
            environ={ENV_SOURCE_ROOTS: str(tmp_path / "env")},
        )

        assert config.source_roots == [cli_root.resolve()]

    def test_update_patterns(self, project: Path):
        config = VendorTreeConfig.load(project, update=["ledger/..."], environ={})

        assert config.update == ["ledger/..."]
        (matches,) = config.skip_vendor
        assert matches("ledger/book")
        assert not matches("audit")

    def test_invalid_toml(self, project: Path):
        write_pyproject(project, "[tool.vendor-tree\n")

        with pytest.raises(VendorConfigError, match="Invalid TOML"):
            VendorTreeConfig.load(project, environ={})

    @pytest.mark.parametrize(
        "body,message",
        [
            ('[tool]\nvendor-tree = "x"\n', "must be a table"),
            ('[tool.vendor-tree]\nsource-roots = ".."\n', "list of strings"),
            ("[tool.vendor-tree]\nsource-roots = [1]\n", "list of strings"),
            ("[tool.vendor-tree]\npattern = 3\n", "must be a string"),
        ],
    )
    def test_invalid_settings(self, project: Path, body: str, message: str):
        write_pyproject(project, body)

        with pytest.raises(VendorConfigError, match=message):
            VendorTreeConfig.load(project, environ={})

    def test_empty_pattern(self, project: Path):
        write_pyproject(project, '[tool.vendor-tree]\npattern = ""\n')

        with pytest.raises(VendorConfigError, match="must not be empty"):
            VendorTreeConfig.load(project, environ={})


def test_direct_construction_resolves_paths(tmp_path: Path):
    config = VendorTreeConfig(project_dir=tmp_path / "shop" / ".." / "shop")

    assert config.project_dir == (tmp_path / "shop").resolve()
    assert config.source_roots == [tmp_path.resolve()]
    assert config.skip_vendor == []
