# SPDX-License-Identifier: MIT
"""Case-insensitive name collision detection.

Two names that differ only in letter case cannot coexist on a
case-insensitive filesystem, so a package holding both is rejected.
"""

from __future__ import annotations

from typing import Iterable


def to_fold(name: str) -> str:
    """Return the full Unicode case fold of ``name``."""
    return name.casefold()


def find_collision(names: Iterable[str]) -> tuple[str, str] | None:
    """Find the first pair of distinct names with equal case folds.

    Args:
        names: Names to check, in order

    Returns:
        The colliding pair with the lexically smaller name first, or None
    """
    seen: dict[str, str] = {}
    for name in names:
        other = seen.setdefault(to_fold(name), name)
        if other != name:
            return (name, other) if name < other else (other, name)
    return None
