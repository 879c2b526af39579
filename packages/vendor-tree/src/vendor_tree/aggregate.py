# SPDX-License-Identifier: MIT
"""Flattening a resolved graph into the list of packages to vendor."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .errors import PackageError, StandardLibraryRoot
from .fs import in_dir
from .resolver import Package


def dependencies(roots: Iterable[Package], cwd: Path) -> list[Package]:
    """Return the external dependencies of ``roots``.

    Dependencies whose directory lies under ``cwd`` belong to the project
    being vendored and are left out.

    Args:
        roots: Loaded root packages
        cwd: Directory of the project being vendored

    Returns:
        Unique dependencies sorted by import path
    """
    cwd = Path(cwd).resolve()
    found: dict[str, Package] = {}
    for root in roots:
        for dep in root.deps:
            if in_dir(dep.dir, cwd):
                continue
            found.setdefault(dep.import_path, dep)
    return [found[path] for path in sorted(found)]


def reachable(roots: Iterable[Package]) -> list[Package]:
    """Return the roots followed by every package they depend on.

    Unlike ``dependencies`` this keeps packages inside the project, such as
    copies already in its vendor tree, so their errors are not lost.
    """
    found: dict[str, Package] = {}
    for root in roots:
        found.setdefault(root.import_path, root)
        for dep in root.deps:
            found.setdefault(dep.import_path, dep)
    return list(found.values())


def collect_errors(packages: Iterable[Package]) -> list[PackageError]:
    """Gather every error that makes a run fail, in package order."""
    errors: list[PackageError] = []
    seen: set[str] = set()
    for pkg in packages:
        if pkg.import_path in seen:
            continue
        seen.add(pkg.import_path)
        if pkg.error is not None:
            errors.append(pkg.error)
        if pkg.standard:
            errors.append(
                StandardLibraryRoot(import_stack=[pkg.import_path], path=pkg.import_path)
            )
    return errors
