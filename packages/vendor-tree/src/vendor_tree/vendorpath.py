# SPDX-License-Identifier: MIT
"""Vendor directory expansion of import paths.

If the importing package lives in ``x/y/z``, an import of ``path`` may expand
to ``x/y/z/vendor/path``, ``x/y/vendor/path``, ``x/vendor/path`` or
``vendor/path``. The deepest vendor copy wins; if none exists the path is
left unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Sequence

from .errors import VendorPathError
from .fs import VENDOR_DIR, in_dir


@dataclass(frozen=True)
class VendorSearchResult:
    """Outcome of a vendor expansion.

    Attributes:
        import_path: Effective import path (possibly unchanged)
        searched: Vendor candidates examined when nothing matched
    """

    import_path: str
    searched: list[Path] = field(default_factory=list)


class PathBoundaries:
    """Directories from ``directory`` up to ``root``, deepest first.

    Iterating yields ``(base, chopped)`` pairs where ``chopped`` is the number
    of path segments removed from ``directory`` to reach ``base``. Each
    iteration starts again from ``directory``.
    """

    def __init__(self, directory: Path, root: Path):
        if root not in directory.parents:
            raise VendorPathError(
                f"invalid vendor search: dir={str(directory)!r} root={str(root)!r}"
            )
        self.directory = directory
        self.root = root
        self.parts = directory.relative_to(root).parts

    def __iter__(self) -> Iterator[tuple[Path, int]]:
        for chopped in range(len(self.parts) + 1):
            yield self.root.joinpath(*self.parts[: len(self.parts) - chopped]), chopped

    def __len__(self) -> int:
        return len(self.parts) + 1


class VendorPathResolver:
    """Computes effective import paths for imports made by packages under cwd."""

    def __init__(self, cwd: Path, skip_vendor: Sequence[Callable[[str], bool]] = ()):
        self.cwd = cwd
        self.skip_vendor = list(skip_vendor)
        self._is_dir_cache: dict[Path, bool] = {}

    def reset(self) -> None:
        """Forget cached directory lookups."""
        self._is_dir_cache.clear()

    def is_dir(self, path: Path) -> bool:
        result = self._is_dir_cache.get(path)
        if result is None:
            result = path.is_dir()
            self._is_dir_cache[path] = result
        return result

    def expand(
        self,
        parent_dir: Path | None,
        parent_root: Path | None,
        parent_import_path: str,
        path: str,
    ) -> VendorSearchResult:
        """Expand ``path`` as imported by the package in ``parent_dir``.

        Args:
            parent_dir: Directory of the importing package, None for a root
            parent_root: Source root of the importing package
            parent_import_path: Import path of the importing package
            path: Import path as written in the source

        Returns:
            The effective import path and, when unchanged, the vendor
            directories that were searched
        """
        if parent_dir is None or parent_root is None:
            return VendorSearchResult(path)
        if any(skip(path) for skip in self.skip_vendor):
            return VendorSearchResult(path)

        boundaries = PathBoundaries(parent_dir, parent_root)
        if not in_dir(parent_dir, self.cwd):
            # Vendor trees are only consulted for the packages being vendored,
            # not for their dependencies.
            return VendorSearchResult(path)

        vendor_path = path.split("/")
        searched: list[Path] = []
        for base, chopped in boundaries:
            vendor_dir = base / VENDOR_DIR
            # Only candidates inside an existing vendor tree are reported.
            if not self.is_dir(vendor_dir):
                continue
            target = vendor_dir.joinpath(*vendor_path)
            if self.is_dir(target):
                return VendorSearchResult(_vendored_import_path(parent_import_path, chopped, path))
            searched.append(target)
        return VendorSearchResult(path, searched)


def _vendored_import_path(parent_import_path: str, chopped: int, path: str) -> str:
    segments = parent_import_path.split("/")
    if chopped >= len(segments):
        return f"{VENDOR_DIR}/{path}"
    kept = segments[: len(segments) - chopped]
    return "/".join(kept + [VENDOR_DIR, path])
