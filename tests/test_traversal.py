"""Tests for depth-first walks and visible-index resolution.

Covers parent-first/child-first ordering, evaluator pruning, the visibility
rule, and the "log and report not found" policy for inconsistent trees.
"""

from __future__ import annotations

import unittest

from lazytree.errors import TraversalError
from lazytree.tree_model import (
    FileTree,
    count_visible,
    is_visible,
    resolve_index_of,
    resolve_node_at,
    walk_child_first,
    walk_parent_first,
)
from tree_fixtures import build_nodes, scenario_tree


def _paths(pairs) -> list[str]:
    return [node.path for node, _depth in pairs]


class WalkOrderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = build_nodes({"A/": {"a1": None, "a2": None}, "B": None})

    def test_parent_first_visits_parents_before_children_in_child_order(self) -> None:
        pairs = list(walk_parent_first(self.root))
        self.assertEqual(_paths(pairs), ["/", "/A", "/A/a1", "/A/a2", "/B"])
        self.assertEqual([depth for _node, depth in pairs], [0, 1, 2, 2, 1])

    def test_child_first_visits_children_before_parents(self) -> None:
        self.assertEqual(_paths(walk_child_first(self.root)), ["/A/a1", "/A/a2", "/A", "/B", "/"])

    def test_evaluator_prunes_whole_subtree(self) -> None:
        pairs = walk_parent_first(self.root, lambda node, _parent: node.name != "A")
        self.assertEqual(_paths(pairs), ["/", "/B"])

    def test_evaluator_receives_walk_parent(self) -> None:
        seen: list[tuple[str, str | None]] = []

        def record(node, parent) -> bool:
            seen.append((node.path, parent.path if parent is not None else None))
            return True

        list(walk_parent_first(self.root, record))
        self.assertIn(("/", None), seen)
        self.assertIn(("/A/a1", "/A"), seen)
        self.assertIn(("/B", "/"), seen)

    def test_walk_is_lazy_and_restartable(self) -> None:
        walk = walk_parent_first(self.root)
        first, _depth = next(walk)
        self.assertEqual(first.path, "/")
        self.assertEqual(len(list(walk_parent_first(self.root))), 5)


class VisibilityTests(unittest.TestCase):
    def test_children_of_collapsed_directory_are_not_visible(self) -> None:
        root = build_nodes({"A/": {"a1": None}, "B": None}, collapsed={"/A"})
        visible = _paths(walk_parent_first(root, is_visible))
        self.assertEqual(visible, ["/", "/A", "/B"])

    def test_hidden_node_and_its_subtree_are_skipped(self) -> None:
        root = build_nodes({"A/": {"a1": None}, "B": None})
        root.children[0].hidden = True
        self.assertEqual(_paths(walk_parent_first(root, is_visible)), ["/", "/B"])

    def test_count_visible_excludes_root_row(self) -> None:
        root = build_nodes({"A/": {"a1": None, "a2": None}, "B": None})
        self.assertEqual(count_visible(root), 4)
        root.children[0].collapsed = True
        self.assertEqual(count_visible(root), 2)

    def test_count_visible_of_hidden_root_is_zero(self) -> None:
        root = build_nodes({"B": None})
        root.hidden = True
        self.assertEqual(count_visible(root), 0)


class ResolveTests(unittest.TestCase):
    def test_resolve_node_at_follows_visible_order(self) -> None:
        tree = scenario_tree()
        self.assertEqual(resolve_node_at(tree, 0).path, "/")
        self.assertEqual(resolve_node_at(tree, 1).path, "/A")
        self.assertEqual(resolve_node_at(tree, 2).path, "/B")
        self.assertIsNone(resolve_node_at(tree, 3))
        self.assertIsNone(resolve_node_at(tree, -1))

    def test_resolve_index_of_returns_first_match(self) -> None:
        tree = scenario_tree()
        self.assertEqual(resolve_index_of(tree, lambda node: node.path == "/B"), 2)
        self.assertIsNone(resolve_index_of(tree, lambda node: node.path == "/A/a1"))


class InconsistentTreeTests(unittest.TestCase):
    def test_mismatched_parent_path_raises_during_walk(self) -> None:
        root = build_nodes({"A/": {"a1": None}})
        root.children[0].children[0].parent_path = "/elsewhere"
        with self.assertRaises(TraversalError):
            list(walk_parent_first(root))

    def test_node_reached_twice_raises_during_walk(self) -> None:
        root = build_nodes({"B": None})
        root.children.append(root.children[0])
        with self.assertRaises(TraversalError):
            list(walk_child_first(root))

    def test_resolution_logs_and_reports_not_found(self) -> None:
        root = build_nodes({"A/": {"a1": None}, "B": None})
        root.children[1].parent_path = "/A"
        tree = FileTree([root])

        with self.assertLogs("lazytree.tree_model.traversal", level="ERROR") as logs:
            self.assertIsNone(resolve_node_at(tree, 3))
        self.assertIn("unable to get node position", logs.output[0])

        with self.assertLogs("lazytree.tree_model.traversal", level="ERROR"):
            self.assertIsNone(resolve_index_of(tree, lambda node: node.path == "/B"))


if __name__ == "__main__":
    unittest.main()
