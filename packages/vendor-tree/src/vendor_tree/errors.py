# SPDX-License-Identifier: MIT
"""Errors raised by vendor-tree and errors attached to loaded packages.

Problems with an individual package never raise: they are recorded on the
package as one of the ``PackageError`` kinds below and reported once the
whole graph has been resolved. Exceptions derived from ``VendorTreeError`` are
reserved for configuration problems and broken invariants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class VendorTreeError(Exception):
    """Base class for vendor-tree exceptions."""

    pass


class VendorPathError(VendorTreeError):
    """Raised when a package directory does not lie under its source root."""

    pass


@dataclass
class PackageError(ABC):
    """An error loading a single package (not its dependencies).

    Attributes:
        import_stack: Shortest known chain of imports leading to the package
        position: Source position of the failing import, if known
    """

    import_stack: list[str] = field(default_factory=list)
    position: str | None = None

    is_import_cycle = False
    hard = True

    @property
    @abstractmethod
    def message(self) -> str:
        """Description of the problem, without the import chain."""

    def __str__(self) -> str:
        if self.is_import_cycle:
            return f"{self.message}\npackage {_join_stack(self.import_stack)}\n"
        if self.position:
            # The file position is more useful than the import chain.
            return f"{self.position}: {self.message}"
        if not self.import_stack:
            return self.message
        return f"package {_join_stack(self.import_stack)}: {self.message}"


@dataclass
class LoadFailure(PackageError):
    """The package loader could not read or parse the package."""

    reason: str = ""

    @property
    def message(self) -> str:
        return self.reason


@dataclass
class ImportCycle(PackageError):
    """The package was imported again while it was still being loaded."""

    is_import_cycle = True

    @property
    def message(self) -> str:
        return "import cycle not allowed"


@dataclass
class FileNameCollision(PackageError):
    """Two source files of the package differ only in case."""

    first: str = ""
    second: str = ""

    @property
    def message(self) -> str:
        return f"case-insensitive file name collision: {self.first!r} and {self.second!r}"


@dataclass
class ImportPathCollision(PackageError):
    """Two dependencies of the package differ only in case."""

    first: str = ""
    second: str = ""

    @property
    def message(self) -> str:
        return f"case-insensitive import collision: {self.first!r} and {self.second!r}"


@dataclass
class LocalImport(PackageError):
    """A relative import escaped a package that was not loaded locally."""

    path: str = ""

    @property
    def message(self) -> str:
        return f"local import {self.path!r} in non-local package"


@dataclass
class NotImportable(PackageError):
    """The imported package is a program, not an importable package."""

    path: str = ""

    @property
    def message(self) -> str:
        return f"import {self.path!r} is a program, not an importable package"


@dataclass
class StandardLibraryRoot(PackageError):
    """A standard library package was named as a root or dependency."""

    path: str = ""

    @property
    def message(self) -> str:
        return f"package {self.path} is in the standard library"

    def __str__(self) -> str:
        return self.message


def _join_stack(stack: list[str]) -> str:
    return "\n\timports ".join(stack)
