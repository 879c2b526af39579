# SPDX-License-Identifier: MIT
"""Copy the dependencies of a project into its vendor tree.

This package resolves the transitive dependencies of the packages in a
project and copies every external dependency into ``vendor/`` inside the
project, so the project no longer relies on a shared workspace.

Example:
    >>> from vendor_tree import VendorTreeConfig, vendor_dependencies
    >>>
    >>> config = VendorTreeConfig.load(".", update=["ledger/..."])
    >>> result = vendor_dependencies(config)
    >>> for error in result.errors:
    ...     print(error)
"""

__version__ = "0.1.0"

from .aggregate import collect_errors, dependencies, reachable
from .collision import find_collision
from .config import VendorConfigError, VendorTreeConfig
from .copier import CopyResult, copy_dependency, materialize
from .discovery import match_packages_in_fs
from .errors import (
    FileNameCollision,
    ImportCycle,
    ImportPathCollision,
    LoadFailure,
    LocalImport,
    NotImportable,
    PackageError,
    StandardLibraryRoot,
    VendorPathError,
    VendorTreeError,
)
from .loader import (
    LoaderError,
    PackageInfo,
    PackageLoader,
    PackageNotFoundError,
    Position,
    SourceTreeLoader,
)
from .packager import VendorResult, resolve_dependencies, vendor_dependencies
from .pattern import has_path_prefix, match_pattern, split_list
from .resolver import ImportStack, Package, PackageResolver
from .vendorpath import PathBoundaries, VendorPathResolver, VendorSearchResult

__all__ = [
    # Config
    "VendorTreeConfig",
    "VendorConfigError",
    # Loader
    "PackageLoader",
    "SourceTreeLoader",
    "PackageInfo",
    "Position",
    "LoaderError",
    "PackageNotFoundError",
    # Resolver
    "ImportStack",
    "Package",
    "PackageResolver",
    "PathBoundaries",
    "VendorPathResolver",
    "VendorSearchResult",
    # Errors
    "VendorTreeError",
    "VendorPathError",
    "PackageError",
    "LoadFailure",
    "ImportCycle",
    "FileNameCollision",
    "ImportPathCollision",
    "LocalImport",
    "NotImportable",
    "StandardLibraryRoot",
    # Aggregation and copying
    "dependencies",
    "collect_errors",
    "reachable",
    "find_collision",
    "copy_dependency",
    "materialize",
    "CopyResult",
    "match_packages_in_fs",
    # Packager
    "resolve_dependencies",
    "vendor_dependencies",
    "VendorResult",
    # Patterns
    "match_pattern",
    "split_list",
    "has_path_prefix",
]
