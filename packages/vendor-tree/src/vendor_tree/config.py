# SPDX-License-Identifier: MIT
"""Configuration for a vendoring run.

Settings come from the ``[tool.vendor-tree]`` table of the project's
pyproject.toml, the ``VENDOR_TREE_PATH`` environment variable and the command
line, in increasing order of precedence.

Example pyproject.toml:
    [tool.vendor-tree]
    source-roots = ["..", "../../shared"]
    pattern = "./..."
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import VendorTreeError
from .fs import VENDOR_DIR
from .pattern import match_pattern

ENV_SOURCE_ROOTS = "VENDOR_TREE_PATH"

DEFAULT_PATTERN = "./..."


class VendorConfigError(VendorTreeError):
    """Raised when vendoring configuration is invalid."""

    pass


@dataclass
class VendorTreeConfig:
    """Configuration for one vendoring run.

    Attributes:
        project_dir: Directory of the project being vendored
        source_roots: Directories searched for packages by import path
        update: Patterns of dependencies to copy again even if vendored
        pattern: Pattern selecting the project's root packages
    """

    project_dir: Path
    source_roots: list[Path] = field(default_factory=list)
    update: list[str] = field(default_factory=list)
    pattern: str = DEFAULT_PATTERN

    def __post_init__(self) -> None:
        self.project_dir = Path(self.project_dir).resolve()
        if not self.source_roots:
            self.source_roots = [self.project_dir.parent]
        self.source_roots = [Path(r).resolve() for r in self.source_roots]
        if not self.pattern:
            raise VendorConfigError("pattern must not be empty")

    @property
    def vendor_dir(self) -> Path:
        """The vendor tree inside the project."""
        return self.project_dir / VENDOR_DIR

    @property
    def skip_vendor(self) -> list[Callable[[str], bool]]:
        """Predicates for import paths that bypass existing vendor copies."""
        return [match_pattern(p) for p in self.update]

    @classmethod
    def load(
        cls,
        project_dir: str | Path,
        *,
        update: Sequence[str] = (),
        source_roots: Sequence[str | Path] = (),
        environ: Optional[Mapping[str, str]] = None,
    ) -> "VendorTreeConfig":
        """Build the configuration for ``project_dir``.

        Args:
            project_dir: Directory of the project being vendored
            update: Update patterns given on the command line
            source_roots: Source roots given on the command line
            environ: Environment to read (defaults to ``os.environ``)

        Returns:
            VendorTreeConfig instance

        Raises:
            VendorConfigError: If pyproject.toml is invalid
        """
        project_path = Path(project_dir).resolve()
        env = os.environ if environ is None else environ

        settings: dict[str, Any] = {}
        pyproject_path = project_path / "pyproject.toml"
        if pyproject_path.exists():
            settings = _read_settings(pyproject_path)

        roots: list[Path] = [project_path / r for r in settings.get("source-roots", [])]
        env_roots = [r for r in env.get(ENV_SOURCE_ROOTS, "").split(os.pathsep) if r]
        if env_roots:
            roots = [Path(r) for r in env_roots]
        if source_roots:
            roots = [Path(r) for r in source_roots]

        return cls(
            project_dir=project_path,
            source_roots=roots,
            update=list(update),
            pattern=settings.get("pattern", DEFAULT_PATTERN),
        )


def _read_settings(pyproject_path: Path) -> dict[str, Any]:
    try:
        with open(pyproject_path, "rb") as f:
            pyproject = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise VendorConfigError(f"Invalid TOML syntax in {pyproject_path}: {e}") from e

    settings = pyproject.get("tool", {}).get("vendor-tree", {})
    if not isinstance(settings, dict):
        raise VendorConfigError("[tool.vendor-tree] must be a table")

    roots = settings.get("source-roots", [])
    if not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
        raise VendorConfigError("tool.vendor-tree.source-roots must be a list of strings")

    pattern = settings.get("pattern", DEFAULT_PATTERN)
    if not isinstance(pattern, str):
        raise VendorConfigError("tool.vendor-tree.pattern must be a string")

    return settings
