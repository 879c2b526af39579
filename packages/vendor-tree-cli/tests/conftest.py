# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Create an empty source root."""
    root = tmp_path / "src"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def write_file(source_root: Path) -> Callable[[str, str], Path]:
    """Return a helper writing files below the source root."""

    def _write(name: str, body: str = "") -> Path:
        path = source_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def shop_project(source_root: Path, write_file: Callable[[str, str], Path]) -> Path:
    """Create a project ``shop`` depending on ``ledger``, which depends on ``audit``."""
    write_file("shop/__init__.py", "import ledger\nimport json\n")
    write_file("shop/tools/__main__.py", "import audit\n")
    write_file("ledger/__init__.py", "import audit\n")
    write_file("ledger/book.py", "ENTRIES = []\n")
    write_file("audit/__init__.py", "TRAIL = []\n")
    return source_root / "shop"
