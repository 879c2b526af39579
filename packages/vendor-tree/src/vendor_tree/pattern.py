# SPDX-License-Identifier: MIT
"""Package patterns and import path helpers.

A pattern is a limited glob in which ``...`` means "any string" and there is
no other special syntax. ``foo/...`` also matches ``foo`` itself.
"""

from __future__ import annotations

import re
from typing import Callable

WILDCARD = "..."


def match_pattern(pattern: str) -> Callable[[str], bool]:
    """Compile a package pattern into a predicate over import paths.

    Args:
        pattern: Pattern such as ``example/...`` or ``./...``

    Returns:
        A function reporting whether a name matches the pattern
    """
    expr = re.escape(pattern).replace(re.escape(WILDCARD), ".*")
    if expr.endswith("/.*"):
        expr = expr[: -len("/.*")] + "(/.*)?"
    regex = re.compile(f"^{expr}$", re.DOTALL)

    def matches(name: str) -> bool:
        return regex.match(name) is not None

    return matches


def split_list(value: str) -> list[str]:
    """Split a colon-separated list, treating the empty string as no items."""
    if not value:
        return []
    return value.split(":")


def match_patterns(value: str) -> list[Callable[[str], bool]]:
    """Compile a colon-separated list of patterns."""
    return [match_pattern(pat) for pat in split_list(value)]


def has_path_prefix(path: str, prefix: str) -> bool:
    """Report whether ``path`` begins with the elements of ``prefix``.

    ``a/b`` has prefix ``a`` but ``ab`` does not.
    """
    if len(path) == len(prefix):
        return path == prefix
    if len(path) < len(prefix):
        return False
    if prefix.endswith("/"):
        return path.startswith(prefix)
    return path[len(prefix)] == "/" and path.startswith(prefix)


def is_local_import(path: str) -> bool:
    """Report whether an import path is relative to the importing directory."""
    return path in (".", "..") or path.startswith("./") or path.startswith("../")
