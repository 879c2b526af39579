# SPDX-License-Identifier: MIT
"""Copying resolved dependencies into the vendor tree."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from .fs import ignore_entries
from .pattern import has_path_prefix
from .resolver import Package


@dataclass
class CopyResult:
    """Outcome of materializing a list of dependencies.

    Attributes:
        copied: Import paths copied into the vendor tree
        skipped: Import paths already covered by an earlier copy
        errors: Failure messages, one or more per failed dependency
    """

    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def vendor_destination(vendor_dir: Path, import_path: str) -> Path:
    """Directory that holds the vendored copy of ``import_path``."""
    return vendor_dir.joinpath(*import_path.split("/"))


def copy_dependency(pkg: Package, vendor_dir: Path) -> list[str]:
    """Replace the vendored copy of ``pkg`` with a fresh copy of its sources.

    Args:
        pkg: Dependency to copy
        vendor_dir: The project's vendor directory

    Returns:
        Error messages; empty on success
    """
    if pkg.dir is None:
        return [f"package {pkg.import_path} has no source directory"]

    dst = vendor_destination(vendor_dir, pkg.import_path)
    try:
        if dst.exists():
            shutil.rmtree(dst)
    except OSError as e:
        return [f"cannot remove {dst}: {e}"]

    try:
        shutil.copytree(pkg.dir, dst, ignore=ignore_entries)
    except shutil.Error as e:
        # copytree keeps going after per-file failures and reports them together
        return [f"{src} -> {target}: {reason}" for src, target, reason in e.args[0]]
    except OSError as e:
        return [f"cannot copy {pkg.dir} to {dst}: {e}"]
    return []


def is_seen(import_path: str, seen: Iterable[str]) -> bool:
    """Report whether ``import_path`` lies within an already copied path."""
    return any(has_path_prefix(import_path, prefix) for prefix in seen)


def materialize(
    deps: Iterable[Package],
    vendor_dir: Path,
    on_copy: Callable[[Package], None] | None = None,
) -> CopyResult:
    """Copy each dependency into ``vendor_dir``, in order.

    A dependency nested under one copied earlier in the run is skipped, since
    the earlier copy already contains it. A failure copying one dependency
    does not stop the others.

    Args:
        deps: Dependencies in aggregate order
        vendor_dir: The project's vendor directory
        on_copy: Called with each dependency before it is copied

    Returns:
        CopyResult describing what was copied
    """
    result = CopyResult()
    seen: list[str] = []
    for pkg in deps:
        if is_seen(pkg.import_path, seen):
            result.skipped.append(pkg.import_path)
            continue
        seen.append(pkg.import_path)
        if on_copy is not None:
            on_copy(pkg)
        errors = copy_dependency(pkg, vendor_dir)
        if errors:
            result.errors.extend(errors)
        else:
            result.copied.append(pkg.import_path)
    return result
