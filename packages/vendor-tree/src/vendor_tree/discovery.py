# SPDX-License-Identifier: MIT
"""Finding the root packages of the project being vendored."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

from .fs import VENDOR_DIR, is_ignored_dir
from .loader import PackageLoader
from .pattern import WILDCARD, match_pattern


def match_packages_in_fs(pattern: str, cwd: Path, loader: PackageLoader) -> list[str]:
    """Return the local package paths under ``cwd`` matching ``pattern``.

    Only the outermost matching package directories are returned, since a
    package includes its sub-directories. Vendor trees are not searched.

    Args:
        pattern: Local pattern such as ``./...``
        cwd: Directory the pattern is relative to
        loader: Decides which directories hold package sources

    Returns:
        Sorted local paths such as ``.`` or ``./tools``
    """
    cwd = Path(cwd)
    match = match_pattern(pattern)
    index = pattern.find(WILDCARD)
    start = posixpath.dirname(pattern[:index]) if index >= 0 else pattern
    start = posixpath.normpath(start or ".")

    found: list[str] = []
    for current, dirnames, _ in os.walk(cwd / start):
        base = Path(current)
        dirnames[:] = sorted(
            d for d in dirnames if d != VENDOR_DIR and not is_ignored_dir(base / d)
        )
        rel = base.relative_to(cwd).as_posix()
        name = "." if rel == "." else f"./{rel}"
        if not match(name) or not loader.is_package_dir(base):
            continue
        if any(name.startswith(f"{outer}/") or outer == "." for outer in found):
            continue
        found.append(name)
    return sorted(found)
