"""Tests for locale-aware path translation."""

from __future__ import annotations

import pytest

from i18n_routes.models import PathLeaf, PathNode, build_path_tree
from i18n_routes.paths import child_tree, translate_path, translate_segment


class TestTranslateSegment:
    """Single segment lookups."""

    def test_leaf_value(self) -> None:
        assert translate_segment("about", {"about": PathLeaf("a-propos")}) == "a-propos"

    def test_node_index(self) -> None:
        tree = {"dashboard": PathNode(index="tableau-de-bord")}
        assert translate_segment("dashboard", tree) == "tableau-de-bord"

    def test_node_without_index_falls_back(self) -> None:
        tree = {"dashboard": PathNode(children={"settings": PathLeaf("parametres")})}
        assert translate_segment("dashboard", tree) == "dashboard"

    def test_missing_segment_falls_back(self) -> None:
        assert translate_segment("pricing", {}) == "pricing"

    def test_child_tree_of_leaf_is_empty(self) -> None:
        assert child_tree("about", {"about": PathLeaf("a-propos")}) == {}


class TestTranslatePath:
    """Recursive path translation."""

    def test_nested_index_and_child(self) -> None:
        tree = build_path_tree({"a": {"index": "x", "b": "y"}})
        assert translate_path("a/b", tree) == "x/y"

    def test_index_segment_below_node(self) -> None:
        tree = build_path_tree({"a": {"index": "x"}})
        assert child_tree("a", tree) == {"index": PathLeaf("x")}
        assert translate_path("a/index", tree) == "x/x"
        assert translate_path("a/index/b", tree) == "x/x/b"

    def test_leaf_parent_keeps_child(self) -> None:
        tree = build_path_tree({"a": "x"})
        assert translate_path("a/b", tree) == "x/b"

    def test_empty_path(self) -> None:
        tree = build_path_tree({"": "ignored-root", "a": "x"})
        assert translate_path("", build_path_tree({"a": "x"})) == ""
        assert translate_path("", {}) == ""
        # an explicit root entry is an ordinary lookup
        assert translate_path("", tree) == "ignored-root"

    def test_leading_slash(self) -> None:
        tree = build_path_tree({"a": "x"})
        assert translate_path("/a", tree) == "/a"

    @pytest.mark.parametrize("path", ["pricing", "blog/2024/post", "feed.xml", "a/b/c/"])
    def test_identity_without_entries(self, path: str) -> None:
        assert translate_path(path, {}) == path
        assert translate_path(path, build_path_tree({"other": "x"})) == path

    def test_deep_nesting(self) -> None:
        tree = build_path_tree(
            {
                "dashboard": {
                    "index": "tableau-de-bord",
                    "settings": {"index": "parametres", "billing": "facturation"},
                }
            }
        )
        assert translate_path("dashboard/settings/billing", tree) == (
            "tableau-de-bord/parametres/facturation"
        )
        assert translate_path("dashboard/settings", tree) == "tableau-de-bord/parametres"
        assert translate_path("dashboard/users", tree) == "tableau-de-bord/users"

    def test_children_are_scoped_to_parent(self) -> None:
        tree = build_path_tree({"settings": "reglages", "dashboard": {"index": "tableau"}})
        # top-level "settings" does not apply below "dashboard"
        assert translate_path("dashboard/settings", tree) == "tableau/settings"

    def test_deterministic(self) -> None:
        tree = build_path_tree({"a": {"index": "x", "b": "y"}})
        results = {translate_path("a/b/c", tree) for _ in range(5)}
        assert results == {"x/y/c"}
