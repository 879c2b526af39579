# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for vendor-tree tests."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pytest

from vendor_tree.aggregate import collect_errors, dependencies, reachable
from vendor_tree.errors import PackageError
from vendor_tree.loader import SourceTreeLoader
from vendor_tree.pattern import match_patterns
from vendor_tree.resolver import Package, PackageResolver


@dataclass
class Workspace:
    """A source root populated from a file table.

    Attributes:
        src: The source root
        cwd: The project directory being vendored
    """

    src: Path
    cwd: Path

    def write(self, name: str, body: str = "") -> Path:
        """Write a file below the source root."""
        path = self.src / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    def loader(self) -> SourceTreeLoader:
        return SourceTreeLoader([self.src])

    def resolver(self, update: str = "") -> PackageResolver:
        return PackageResolver(self.loader(), self.cwd, match_patterns(update))

    def find_deps(
        self, roots: list[str], update: str = ""
    ) -> tuple[list[Package], list[Package], list[PackageError]]:
        """Load ``roots`` and return (roots, dependencies, errors)."""
        resolver = self.resolver(update)
        loaded = resolver.load_roots(roots)
        deps = dependencies(loaded, self.cwd)
        return loaded, deps, collect_errors(reachable(loaded))


def parse_table(table: str) -> list[tuple[str, str]]:
    """Parse ``path: body`` lines into (path, file contents) pairs."""
    entries = []
    for line in table.strip().splitlines():
        line = line.strip()
        name, sep, body = line.partition(":")
        if not sep or not name:
            continue
        entries.append((name.strip(), body.strip() + "\n"))
    return entries


@pytest.fixture
def make_workspace(tmp_path: Path) -> Callable[[str, str], Workspace]:
    """Create a workspace from a table of files.

    The project directory is the directory of the first package named by
    ``start``, below the source root ``tmp_path / "src"``.
    """

    def _make(start: str, table: str) -> Workspace:
        src = tmp_path / "src"
        src.mkdir(exist_ok=True)
        workspace = Workspace(src=src.resolve(), cwd=(src / start).resolve())
        for name, body in parse_table(table):
            workspace.write(name, body)
        workspace.cwd.mkdir(parents=True, exist_ok=True)
        return workspace

    return _make
