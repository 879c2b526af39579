# SPDX-License-Identifier: MIT
"""Tests for finding the project's root packages."""

from __future__ import annotations

from vendor_tree.discovery import match_packages_in_fs


class TestMatchPackagesInFs:
    """Tests for match_packages_in_fs()."""

    def test_project_that_is_a_package(self, make_workspace):
        workspace = make_workspace(
            "shop",
            """
            shop/__init__.py:
            shop/cart/__init__.py:
            shop/tools/cli/__init__.py:
            """,
        )

        assert match_packages_in_fs("./...", workspace.cwd, workspace.loader()) == ["."]

    def test_outermost_packages_only(self, make_workspace):
        workspace = make_workspace(
            "shop",
            """
            shop/README.md:        shop
            shop/cart/__init__.py:
            shop/cart/sub/__init__.py:
            shop/tools/cli/__main__.py:
            shop/tools/cli/inner/__init__.py:
            shop/docs/index.md:    docs
            """,
        )

        found = match_packages_in_fs("./...", workspace.cwd, workspace.loader())

        assert found == ["./cart", "./tools/cli"]

    def test_vendor_and_ignored_directories_are_skipped(self, make_workspace):
        workspace = make_workspace(
            "shop",
            """
            shop/app/__init__.py:
            shop/vendor/ledger/__init__.py:
            shop/.cache/junk/__init__.py:
            shop/testdata/case/__init__.py:
            shop/__pycache__/mod.py:
            """,
        )

        found = match_packages_in_fs("./...", workspace.cwd, workspace.loader())

        assert found == ["./app"]

    def test_pattern_selects_subtree(self, make_workspace):
        workspace = make_workspace(
            "shop",
            """
            shop/app/__init__.py:
            shop/tools/cli/__init__.py:
            shop/tools/lint/__init__.py:
            """,
        )

        found = match_packages_in_fs("./tools/...", workspace.cwd, workspace.loader())

        assert found == ["./tools/cli", "./tools/lint"]

    def test_literal_pattern(self, make_workspace):
        workspace = make_workspace(
            "shop",
            """
            shop/app/__init__.py:
            shop/tools/cli/__init__.py:
            """,
        )

        found = match_packages_in_fs("./app", workspace.cwd, workspace.loader())

        assert found == ["./app"]

    def test_no_packages(self, make_workspace):
        workspace = make_workspace("shop", "shop/README.md: nothing here")

        assert match_packages_in_fs("./...", workspace.cwd, workspace.loader()) == []
