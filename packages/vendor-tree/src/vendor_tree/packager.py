# SPDX-License-Identifier: MIT
"""Vendoring the dependencies of a project.

This module ties the pieces together: it finds the project's root packages,
resolves their dependency graph, and copies every external dependency that is
new (or selected for update) into the project's vendor directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from .aggregate import collect_errors, dependencies, reachable
from .config import VendorTreeConfig
from .copier import CopyResult, materialize
from .discovery import match_packages_in_fs
from .errors import PackageError
from .loader import PackageLoader, SourceTreeLoader
from .resolver import Package, PackageResolver


@dataclass
class VendorResult:
    """Result of a vendoring run.

    Attributes:
        roots: Root packages of the project
        dependencies: External dependencies needing a vendored copy
        errors: Errors found while loading; nothing is copied if any
        copy: Outcome of the copy step, None if it did not run
    """

    roots: list[Package] = field(default_factory=list)
    dependencies: list[Package] = field(default_factory=list)
    errors: list[PackageError] = field(default_factory=list)
    copy: Optional[CopyResult] = None

    @property
    def ok(self) -> bool:
        """True if loading and copying both succeeded."""
        if self.errors:
            return False
        return self.copy is None or self.copy.ok

    def get_copied_paths(self) -> list[str]:
        return list(self.copy.copied) if self.copy else []


def resolve_dependencies(
    config: VendorTreeConfig,
    loader: Optional[PackageLoader] = None,
    resolver: Optional[PackageResolver] = None,
) -> VendorResult:
    """Load the project's roots and find the dependencies to vendor.

    Args:
        config: Vendoring configuration
        loader: Package loader (defaults to a SourceTreeLoader over the
            configured source roots)
        resolver: Resolver to use; it is reset before loading

    Returns:
        VendorResult without a copy outcome
    """
    if resolver is None:
        loader = loader or SourceTreeLoader(config.source_roots)
        resolver = PackageResolver(loader, config.project_dir, config.skip_vendor)
    resolver.reset()

    args = match_packages_in_fs(config.pattern, config.project_dir, resolver.loader)
    roots = resolver.load_roots(args)
    deps = dependencies(roots, config.project_dir)
    return VendorResult(
        roots=roots,
        dependencies=deps,
        errors=collect_errors(reachable(roots)),
    )


def vendor_dependencies(
    config: VendorTreeConfig,
    loader: Optional[PackageLoader] = None,
    on_copy: Callable[[Package], None] | None = None,
) -> VendorResult:
    """Vendor the external dependencies of the project in ``config``.

    This function:
    1. Resolves the dependency graph of every root package
    2. Stops if any root or dependency failed to load
    3. Copies each new or updated dependency into ``vendor/``

    Args:
        config: Vendoring configuration
        loader: Package loader (defaults to a SourceTreeLoader)
        on_copy: Called with each dependency before it is copied

    Returns:
        VendorResult describing the run
    """
    result = resolve_dependencies(config, loader)
    if result.errors:
        return result
    result.copy = materialize(result.dependencies, config.vendor_dir, on_copy=on_copy)
    return result
