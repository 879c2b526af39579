# SPDX-License-Identifier: MIT
"""Package metadata loading.

The resolver only depends on the ``PackageLoader`` protocol. ``SourceTreeLoader``
implements it for Python source trees laid out under one or more source roots,
where a package's import path is its directory relative to the source root.

Example:
    Given the source root ``/work`` containing::

        /work/shop/__init__.py      import ledger
        /work/ledger/__init__.py

    ``SourceTreeLoader([Path("/work")]).import_package("shop", ...)`` returns
    a ``PackageInfo`` whose ``imports`` is ``["ledger"]``.
"""

from __future__ import annotations

import ast
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from .errors import VendorTreeError
from .fs import walk_package_files
from .pattern import is_local_import

SOURCE_SUFFIXES = (".py", ".pyi")

STDLIB_MODULES = frozenset(sys.stdlib_module_names) | frozenset(sys.builtin_module_names)

TEST_DIRS = frozenset({"tests", "test"})


class LoaderError(VendorTreeError):
    """Raised when a package cannot be read or parsed."""

    pass


class PackageNotFoundError(LoaderError):
    """Raised when no source root holds a directory for an import path.

    Attributes:
        path: The import path that was looked up
        searched: Candidate directories in the source roots
        vendor_searched: Candidate vendor directories, filled in by the resolver
    """

    def __init__(self, path: str, searched: Sequence[Path]):
        self.path = path
        self.searched = list(searched)
        self.vendor_searched: list[Path] = []
        super().__init__(path)

    def __str__(self) -> str:
        lines = [f"cannot find package {self.path!r} in any of:"]
        lines.extend(f"\t{d} (vendor tree)" for d in self.vendor_searched)
        lines.extend(f"\t{d} (from source root)" for d in self.searched)
        return "\n".join(lines)


@dataclass(frozen=True)
class Position:
    """Location of an import statement."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class PackageInfo:
    """Raw metadata for one package, as reported by a loader.

    Attributes:
        name: Declared package name
        import_path: Canonical import path
        dir: Directory holding the package sources (None for the standard library)
        root: Source root the directory lives under
        standard: True if the package is part of the standard library
        imports: Import paths referenced by ordinary sources
        test_imports: Import paths referenced by tests inside the package
        xtest_imports: Import paths referenced by tests in test directories
        source_files: Source file names, relative to ``dir``
        import_positions: Where each import path is referenced
        is_command: True if the package is a program rather than a library
    """

    name: str
    import_path: str
    dir: Path | None = None
    root: Path | None = None
    standard: bool = False
    imports: list[str] = field(default_factory=list)
    test_imports: list[str] = field(default_factory=list)
    xtest_imports: list[str] = field(default_factory=list)
    source_files: list[str] = field(default_factory=list)
    import_positions: dict[str, list[Position]] = field(default_factory=dict)
    is_command: bool = False


class PackageLoader(Protocol):
    """Contract between the resolver and a metadata reader."""

    def import_package(self, path: str, src_dir: Path) -> PackageInfo:
        """Load the package at ``path``; local paths are relative to ``src_dir``."""
        ...

    def resolve_local_dir(self, directory: Path) -> str | None:
        """Return the canonical import path for a directory, if it has one."""
        ...

    def is_package_dir(self, directory: Path) -> bool:
        """Report whether a directory directly holds package sources."""
        ...


class SourceTreeLoader:
    """Loads Python packages from directories under a list of source roots."""

    def __init__(
        self,
        source_roots: Sequence[Path],
        stdlib_modules: frozenset[str] = STDLIB_MODULES,
    ):
        self.source_roots = [Path(r).resolve() for r in source_roots]
        self.stdlib_modules = stdlib_modules

    def import_package(self, path: str, src_dir: Path) -> PackageInfo:
        """Find and parse the package named by ``path``.

        Raises:
            PackageNotFoundError: If no source root has the package
            LoaderError: If the package cannot be used
        """
        if is_local_import(path):
            directory = (Path(src_dir) / path).resolve()
            located = self._locate_dir(directory)
            if located is None:
                raise LoaderError(f"directory {directory} is outside the source roots")
            root, import_path = located
            return self._read_package(import_path, directory, root)

        if "/" not in path and path in self.stdlib_modules:
            return PackageInfo(name=path, import_path=path, standard=True)

        searched: list[Path] = []
        for root in self.source_roots:
            candidate = root.joinpath(*path.split("/"))
            if candidate.is_dir():
                return self._read_package(path, candidate, root)
            if candidate.with_suffix(".py").is_file():
                raise LoaderError(
                    f"{path!r} is a single-file module ({candidate.with_suffix('.py')}), "
                    "only package directories can be vendored"
                )
            searched.append(candidate)
        raise PackageNotFoundError(path, searched)

    def resolve_local_dir(self, directory: Path) -> str | None:
        located = self._locate_dir(Path(directory).resolve())
        if located is None:
            return None
        return located[1]

    def is_package_dir(self, directory: Path) -> bool:
        return any(
            p.is_file() and p.suffix in SOURCE_SUFFIXES for p in Path(directory).iterdir()
        )

    def _locate_dir(self, directory: Path) -> tuple[Path, str] | None:
        for root in self.source_roots:
            if root in directory.parents:
                return root, directory.relative_to(root).as_posix()
        return None

    def _read_package(self, import_path: str, directory: Path, root: Path) -> PackageInfo:
        info = PackageInfo(
            name=directory.name,
            import_path=import_path,
            dir=directory,
            root=root,
            is_command=(directory / "__main__.py").is_file()
            and not (directory / "__init__.py").is_file(),
        )

        sources = [
            f for f in walk_package_files(directory) if f.suffix in SOURCE_SUFFIXES
        ]
        if not sources:
            raise LoaderError(f"no Python source files in {directory}")

        imports: set[str] = set()
        test_imports: set[str] = set()
        xtest_imports: set[str] = set()
        for source in sources:
            rel = source.relative_to(directory)
            info.source_files.append(rel.as_posix())
            if source.suffix != ".py":
                continue
            if TEST_DIRS.intersection(rel.parts[:-1]):
                target = xtest_imports
            elif _is_test_file(source.name):
                target = test_imports
            else:
                target = imports
            for path, position in self._parse_imports(source, rel, info.name):
                target.add(path)
                info.import_positions.setdefault(path, []).append(position)

        info.imports = sorted(imports)
        info.test_imports = sorted(test_imports)
        info.xtest_imports = sorted(xtest_imports)
        return info

    def _parse_imports(
        self, source: Path, rel: Path, package_name: str
    ) -> list[tuple[str, Position]]:
        try:
            tree = ast.parse(source.read_bytes(), filename=str(source))
        except SyntaxError as e:
            raise LoaderError(f"{source}:{e.lineno}: {e.msg}") from e
        except (OSError, ValueError) as e:
            raise LoaderError(f"cannot read {source}: {e}") from e

        depth = len(rel.parts) - 1
        found: list[tuple[str, Position]] = []
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names = [alias.name.split(".")[0] for alias in node.names]
            elif isinstance(node, ast.ImportFrom):
                if node.level == 0:
                    names = [(node.module or "").split(".")[0]]
                elif node.level - 1 > depth:
                    # Climbs above the package directory.
                    parts = [".."] * (node.level - 1 - depth)
                    if node.module:
                        parts.extend(node.module.split("."))
                    names = ["/".join(parts)]
                else:
                    continue
            else:
                continue
            position = Position(str(source), node.lineno, node.col_offset + 1)
            found.extend((n, position) for n in names if n and n != package_name)
        found.sort(key=lambda item: (item[1].line, item[1].column))
        return found


def _is_test_file(filename: str) -> bool:
    stem = filename[: -len(".py")]
    return stem.startswith("test_") or stem.endswith("_test") or stem == "conftest"
