# SPDX-License-Identifier: MIT
"""Rules for which parts of a source tree are walked and copied.

Underscore-prefixed files (``__init__.py``, ``_compat.py``) and underscore
directories that are Python packages are part of the package and are kept.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

VENDOR_DIR = "vendor"

# Directory names holding test fixtures rather than package code
FIXTURE_DIRS = frozenset({"testdata", "test_data"})


def is_hidden(name: str) -> bool:
    """Dot-prefixed names are hidden, except ``.`` and ``..``."""
    return name.startswith(".") and name not in (".", "..")


def is_ignored_dir(path: Path) -> bool:
    """Report whether a directory tree is skipped when walking or copying.

    Skips hidden directories, fixture directories, and underscore-prefixed
    directories such as ``__pycache__``. An underscore-prefixed directory that
    is itself a Python package (``_impl/__init__.py``) is kept.
    """
    name = path.name
    if is_hidden(name) or name in FIXTURE_DIRS:
        return True
    if name.startswith("_"):
        return not (path / "__init__.py").is_file()
    return False


def ignore_entries(directory: str, names: list[str]) -> set[str]:
    """``shutil.copytree`` ignore callback applying the skip rules."""
    ignored: set[str] = set()
    base = Path(directory)
    for name in names:
        entry = base / name
        if is_hidden(name):
            ignored.add(name)
        elif entry.is_dir() and is_ignored_dir(entry):
            ignored.add(name)
    return ignored


def walk_package_files(directory: Path) -> Iterator[Path]:
    """Yield the files of a package tree in sorted order.

    Nested ``vendor`` directories belong to their own vendor tree and are not
    part of the package.
    """
    for current, dirnames, filenames in os.walk(directory):
        base = Path(current)
        dirnames[:] = sorted(
            d for d in dirnames if d != VENDOR_DIR and not is_ignored_dir(base / d)
        )
        for filename in sorted(filenames):
            if not is_hidden(filename):
                yield base / filename


def in_dir(path: Path | None, directory: Path) -> bool:
    """Report whether ``path`` is ``directory`` or lies beneath it."""
    if path is None:
        return False
    return path == directory or directory in path.parents
