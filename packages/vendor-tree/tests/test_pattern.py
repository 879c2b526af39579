# SPDX-License-Identifier: MIT
"""Tests for package patterns and import path helpers."""

from __future__ import annotations

import pytest
from hypothesis import assume, given, strategies as st

from vendor_tree.pattern import (
    has_path_prefix,
    is_local_import,
    match_pattern,
    match_patterns,
    split_list,
)

import_paths = st.from_regex(r"[a-z][a-z0-9_]{0,6}(/[a-z][a-z0-9_]{0,6}){0,3}", fullmatch=True)


class TestMatchPattern:
    """Tests for match_pattern."""

    @pytest.mark.parametrize(
        "pattern,name,expected",
        [
            ("d", "d", True),
            ("d", "dd", False),
            ("d", "d/e", False),
            ("d/...", "d", True),
            ("d/...", "d/e/f", True),
            ("d/...", "dd", False),
            ("...", "anything/at/all", True),
            ("net/...http", "net/x/http", True),
            ("net/...http", "net/x/https", False),
            ("./...", ".", True),
            ("./...", "./tools", True),
            ("./...", "tools", False),
            ("a.b", "aXb", False),
        ],
    )
    def test_examples(self, pattern: str, name: str, expected: bool):
        assert match_pattern(pattern)(name) is expected

    @given(import_paths)
    def test_literal_pattern_matches_itself(self, path: str):
        assert match_pattern(path)(path)

    @given(import_paths, import_paths)
    def test_literal_pattern_matches_only_itself(self, pattern: str, name: str):
        assume(pattern != name)
        assert not match_pattern(pattern)(name)

    @given(import_paths, import_paths)
    def test_trailing_wildcard_matches_descendants(self, prefix: str, rest: str):
        matches = match_pattern(f"{prefix}/...")

        assert matches(prefix)
        assert matches(f"{prefix}/{rest}")


class TestSplitList:
    """Tests for split_list and match_patterns."""

    def test_empty_string_has_no_items(self):
        assert split_list("") == []
        assert match_patterns("") == []

    def test_colon_separated(self):
        assert split_list("a:b/...:c") == ["a", "b/...", "c"]
        assert len(match_patterns("a:b/...")) == 2


class TestHasPathPrefix:
    """Tests for has_path_prefix."""

    @pytest.mark.parametrize(
        "path,prefix,expected",
        [
            ("a", "a", True),
            ("a/b", "a", True),
            ("ab", "a", False),
            ("a", "a/b", False),
            ("a/b", "a/", True),
            ("b/a", "a", False),
        ],
    )
    def test_examples(self, path: str, prefix: str, expected: bool):
        assert has_path_prefix(path, prefix) is expected

    @given(import_paths, import_paths)
    def test_joined_paths_have_prefix(self, prefix: str, rest: str):
        assert has_path_prefix(f"{prefix}/{rest}", prefix)


def test_is_local_import():
    assert is_local_import(".")
    assert is_local_import("..")
    assert is_local_import("./d")
    assert is_local_import("../d")
    assert not is_local_import("d")
    assert not is_local_import(".d")
