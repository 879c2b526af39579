# SPDX-License-Identifier: MIT
"""Dependency graph resolution with cycle detection.

This module loads packages recursively, sharing one ``Package`` per resolved
import path, expanding imports through vendor directories, and recording the
shortest import chain that leads to each error.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Sequence

from .collision import find_collision
from .errors import (
    FileNameCollision,
    ImportCycle,
    ImportPathCollision,
    LoadFailure,
    LocalImport,
    NotImportable,
    PackageError,
)
from .loader import LoaderError, PackageInfo, PackageLoader, PackageNotFoundError, Position
from .pattern import is_local_import
from .vendorpath import VendorPathResolver

# Imports that name compiler directives rather than packages
PSEUDO_IMPORTS = frozenset({"__future__"})


class ImportStack:
    """The chain of import paths currently being resolved."""

    def __init__(self, paths: Sequence[str] = ()):
        self._paths = list(paths)

    def push(self, path: str) -> None:
        self._paths.append(path)

    def pop(self) -> None:
        self._paths.pop()

    def copy(self) -> list[str]:
        return list(self._paths)

    @contextmanager
    def entered(self, path: str) -> Iterator[ImportStack]:
        """Push ``path`` for the duration of a ``with`` block."""
        self.push(path)
        try:
            yield self
        finally:
            self.pop()

    def shorter_than(self, other: Sequence[str]) -> bool:
        """Report whether this stack sorts before ``other``.

        Shorter stacks come first; stacks of equal length are ordered by
        comparing their import paths in turn.
        """
        return (len(self._paths), self._paths) < (len(other), list(other))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        return f"ImportStack({self._paths!r})"


@dataclass(eq=False)
class Package:
    """A package in the resolved graph, keyed by its resolved import path.

    Attributes:
        import_path: Resolved import path, unique within a resolution run
        loading: True while the package's own load is in progress
        loaded_deps: True once ``deps`` is final
        deps: Transitive dependencies, sorted by import path, no standard library
        error: Error loading this package (not its dependencies)
    """

    import_path: str
    name: str = ""
    dir: Path | None = None
    root: Path | None = None
    standard: bool = False
    imports: list[str] = field(default_factory=list)
    test_imports: list[str] = field(default_factory=list)
    xtest_imports: list[str] = field(default_factory=list)
    source_files: list[str] = field(default_factory=list)
    import_positions: dict[str, list[Position]] = field(default_factory=dict)
    is_command: bool = False
    error: PackageError | None = None
    loading: bool = True
    loaded_deps: bool = False
    deps: list[Package] = field(default_factory=list)

    def copy_info(self, info: PackageInfo) -> None:
        """Take over the metadata reported by the loader."""
        self.name = info.name
        self.dir = info.dir
        self.root = info.root
        self.standard = info.standard
        self.imports = list(info.imports)
        self.test_imports = list(info.test_imports)
        self.xtest_imports = list(info.xtest_imports)
        self.source_files = list(info.source_files)
        self.import_positions = dict(info.import_positions)
        self.is_command = info.is_command

    def set_error(self, error: PackageError) -> None:
        """Attach ``error`` unless the package already carries one."""
        if self.error is None:
            self.error = error

    def first_position(self, path: str) -> Position | None:
        positions = self.import_positions.get(path)
        return positions[0] if positions else None

    def __repr__(self) -> str:
        return f"Package({self.import_path!r})"


class PackageResolver:
    """Loads packages and their dependencies, caching by resolved import path.

    One resolver holds the state of one resolution run; call ``reset`` before
    reusing it for another.
    """

    def __init__(
        self,
        loader: PackageLoader,
        cwd: Path,
        skip_vendor: Sequence[Callable[[str], bool]] = (),
    ):
        self.loader = loader
        self.cwd = Path(cwd).resolve()
        self.vendor_paths = VendorPathResolver(self.cwd, skip_vendor)
        self._cache: dict[str, Package] = {}

    def reset(self) -> None:
        """Drop all loaded packages and cached directory lookups."""
        self._cache.clear()
        self.vendor_paths.reset()

    def cached(self, import_path: str) -> Package | None:
        return self._cache.get(import_path)

    def load_roots(self, args: Sequence[str]) -> list[Package]:
        """Load the packages named by ``args``, each distinct argument once."""
        packages: list[Package] = []
        seen: set[str] = set()
        stack = ImportStack()
        for arg in args:
            if arg not in seen:
                seen.add(arg)
                packages.append(self.load_root(arg, stack))
        return packages

    def load_root(self, arg: str, stack: ImportStack) -> Package:
        """Load a package named on the command line.

        A local path that names a directory under a source root is replaced
        by that directory's import path.
        """
        if is_local_import(arg):
            import_path = self.loader.resolve_local_dir(self.cwd / arg)
            if import_path:
                arg = import_path
        return self.load(arg, self.cwd, None, stack)

    def load(
        self,
        path: str,
        src_dir: Path,
        parent: Package | None,
        stack: ImportStack,
        import_positions: Sequence[Position] = (),
    ) -> Package:
        """Load the package imported as ``path`` and all of its dependencies.

        Args:
            path: Import path as written by the importer
            src_dir: Directory that local paths are relative to
            parent: Importing package, None for a root
            stack: Import chain leading here
            import_positions: Where the importer references ``path``

        Returns:
            The cached or newly loaded package; problems are recorded in its
            ``error`` rather than raised
        """
        with stack.entered(path):
            if parent is None:
                search = self.vendor_paths.expand(None, None, "", path)
            else:
                search = self.vendor_paths.expand(
                    parent.dir, parent.root, parent.import_path, path
                )
            import_path = search.import_path

            pkg = self._cache.get(import_path)
            if pkg is not None:
                return self._reuse(pkg, stack)

            pkg = Package(import_path)
            self._cache[import_path] = pkg
            try:
                self._load_new(pkg, src_dir, stack, search.searched)
            finally:
                pkg.loading = False

            if pkg.error is not None and pkg.error.position is None and import_positions:
                pkg.error.position = self._short_position(import_positions[0])
            return pkg

    def _reuse(self, pkg: Package, stack: ImportStack) -> Package:
        if pkg.loading:
            pkg.set_error(ImportCycle(import_stack=stack.copy()))
        # Keep the full cycle chain rather than a shorter path to the package.
        elif (
            pkg.error is not None
            and not pkg.error.is_import_cycle
            and stack.shorter_than(pkg.error.import_stack)
        ):
            pkg.error.import_stack = stack.copy()
        return pkg

    def _load_new(
        self,
        pkg: Package,
        src_dir: Path,
        stack: ImportStack,
        vendor_searched: list[Path],
    ) -> None:
        try:
            info = self.loader.import_package(pkg.import_path, src_dir)
        except PackageNotFoundError as e:
            e.vendor_searched = list(vendor_searched)
            pkg.set_error(LoadFailure(import_stack=stack.copy(), reason=str(e)))
            return
        except LoaderError as e:
            pkg.set_error(LoadFailure(import_stack=stack.copy(), reason=str(e)))
            return

        pkg.copy_info(info)
        if pkg.standard:
            return
        self._load_deps(pkg, stack)

    def _load_deps(self, pkg: Package, stack: ImportStack) -> None:
        # Reject packages whose file names clash on case-insensitive filesystems.
        collision = find_collision(pkg.source_files)
        if collision is not None:
            pkg.set_error(
                FileNameCollision(
                    import_stack=stack.copy(), first=collision[0], second=collision[1]
                )
            )
            return

        deps: dict[str, Package] = {}
        for imports in (pkg.imports, pkg.test_imports, pkg.xtest_imports):
            for i, path in enumerate(imports):
                if path in PSEUDO_IMPORTS:
                    continue
                position = pkg.first_position(path)
                if is_local_import(path) and not is_local_import(pkg.import_path):
                    pkg.set_error(
                        LocalImport(
                            import_stack=stack.copy(),
                            position=str(position) if position else None,
                            path=path,
                        )
                    )
                    continue

                dep = self.load(
                    path, pkg.dir or self.cwd, pkg, stack, pkg.import_positions.get(path, ())
                )
                if dep.is_command:
                    pkg.set_error(
                        NotImportable(
                            import_stack=stack.copy(),
                            position=str(position) if position else None,
                            path=path,
                        )
                    )
                imports[i] = dep.import_path
                if dep.import_path != path and path in pkg.import_positions:
                    pkg.import_positions.setdefault(
                        dep.import_path, pkg.import_positions[path]
                    )
                if dep.standard:
                    continue
                deps[dep.import_path] = dep
                for sub in dep.deps:
                    deps[sub.import_path] = sub

        dep_paths = sorted(deps)
        pkg.deps = [deps[p] for p in dep_paths]
        pkg.loaded_deps = True

        # Collisions below an erroring dependency are reported there instead.
        if any(dep.error is not None for dep in pkg.deps):
            return
        collision = find_collision(dep_paths)
        if collision is not None:
            pkg.set_error(
                ImportPathCollision(
                    import_stack=stack.copy(), first=collision[0], second=collision[1]
                )
            )

    def _short_position(self, position: Position) -> str:
        filename = position.filename
        try:
            rel = os.path.relpath(filename, self.cwd)
        except ValueError:
            rel = filename
        if len(rel) < len(filename):
            filename = rel
        return str(Position(filename, position.line, position.column))
