# SPDX-License-Identifier: MIT
"""CLI entry point for the vendor-tree command."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from vendor_tree import (
    Package,
    VendorConfigError,
    VendorTreeConfig,
    VendorTreeError,
    materialize,
    resolve_dependencies,
    split_list,
)


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


def echo_problem(message: str) -> None:
    """Print a package problem to stderr without decoration."""
    click.echo(message, err=True)


@click.command()
@click.version_option(package_name="vendor-tree")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Print each root package and each copied dependency.",
)
@click.option(
    "-u",
    "--update",
    "update",
    default="",
    metavar="PATTERNS",
    help="Copy dependencies matching these colon-separated patterns even if already vendored.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Vendor the project in this directory instead of the current one.",
)
@click.option(
    "-s",
    "--source-root",
    "source_roots",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to search for packages (repeatable; overrides configuration).",
)
@pass_context
def cli(
    ctx: Context,
    verbose: bool,
    update: str,
    directory: Optional[Path],
    source_roots: tuple[Path, ...],
) -> None:
    """Copy the dependencies of every package in the project into vendor/.

    With no options only dependencies that are not vendored yet are copied;
    existing copies are left unchanged.

    \b
    Examples:
        vendor-tree                      # Vendor new dependencies
        vendor-tree -v                   # Show roots and copies
        vendor-tree -u ledger/...        # Refresh the vendored ledger packages
        vendor-tree -u 'ledger:audit'    # Refresh several dependencies
    """
    ctx.verbose = verbose
    ctx.project_dir = directory or Path.cwd()

    try:
        config = VendorTreeConfig.load(
            ctx.project_dir,
            update=split_list(update),
            source_roots=source_roots,
        )
    except VendorConfigError as e:
        echo_error(str(e))
        raise SystemExit(1)

    try:
        result = resolve_dependencies(config)
    except VendorTreeError as e:
        echo_error(str(e))
        raise SystemExit(1)

    if not result.roots:
        echo_warning(f"{config.pattern} matched no packages")
    if ctx.verbose:
        for root in result.roots:
            echo_info(f"root {root.import_path}")

    if result.errors:
        for error in result.errors:
            echo_problem(str(error))
        echo_problem("error(s) loading dependencies")
        raise SystemExit(1)

    def report_copy(pkg: Package) -> None:
        if ctx.verbose:
            echo_info(f"copy {pkg.import_path}")

    result.copy = materialize(result.dependencies, config.vendor_dir, on_copy=report_copy)
    if result.copy.errors:
        for message in result.copy.errors:
            echo_problem(message)
        echo_problem("error(s) copying dependencies")
        raise SystemExit(1)

    if ctx.verbose:
        echo_success(f"Vendored {len(result.get_copied_paths())} package(s)")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except VendorTreeError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
