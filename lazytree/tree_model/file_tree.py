"""Filesystem-backed tree model with one layer per workspace root."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..errors import TraversalError, TreePathError
from ..git_status import collect_diff_types
from ..gitignore import load_gitignore_matcher
from ..ui_theme import DEFAULT_THEME, UITheme
from .build import build_node_tree
from .rendering import format_node_row
from .traversal import Evaluator, count_visible, is_visible, visit_all, walk_child_first, walk_parent_first
from .types import DiffType, Node

logger = logging.getLogger(__name__)


class FileTree:
    """Tree model over one or more root hierarchies.

    Each root is a layer; exactly one layer is active at a time. Hidden diff
    types apply across layers and are re-applied when the layer changes.
    """

    def __init__(
        self,
        layers: Sequence[Node],
        layer_labels: Sequence[str] | None = None,
        theme: UITheme | None = None,
    ) -> None:
        if not layers:
            raise ValueError("FileTree requires at least one layer")
        self.layers = list(layers)
        self.layer_labels = list(layer_labels) if layer_labels is not None else [layer.name for layer in self.layers]
        self.layer_index = 0
        self.hidden_types: set[DiffType] = set()
        self.theme = theme or DEFAULT_THEME

    @classmethod
    def from_paths(
        cls,
        roots: Sequence[Path],
        show_hidden: bool = False,
        skip_gitignored: bool = False,
        use_git: bool = True,
        collapsed: bool = False,
        theme: UITheme | None = None,
    ) -> FileTree:
        """Scan each directory in ``roots`` into a layer."""
        layers: list[Node] = []
        labels: list[str] = []
        for raw_root in roots:
            root = raw_root.resolve()
            matcher = load_gitignore_matcher(root) if skip_gitignored else None
            diff_types = collect_diff_types(root) if use_git else {}
            layers.append(
                build_node_tree(
                    root,
                    show_hidden=show_hidden,
                    ignore_matcher=matcher,
                    diff_types=diff_types,
                    collapsed=collapsed,
                )
            )
            labels.append(str(root))
        return cls(layers, layer_labels=labels, theme=theme)

    @property
    def root(self) -> Node:
        return self.layers[self.layer_index]

    @property
    def layer_label(self) -> str:
        return self.layer_labels[self.layer_index]

    def walk_parent_first(self, evaluator: Evaluator = visit_all) -> Iterator[tuple[Node, int]]:
        return walk_parent_first(self.root, evaluator)

    def walk_child_first(self, evaluator: Evaluator = visit_all) -> Iterator[tuple[Node, int]]:
        return walk_child_first(self.root, evaluator)

    def node_for_path(self, path: str) -> Node | None:
        """Return the active-layer node at tree ``path`` or ``None``."""
        current = self.root
        for name in (part for part in path.split("/") if part):
            current = next((child for child in current.children if child.name == name), None)
            if current is None:
                return None
        return current

    def remove_path(self, path: str) -> None:
        """Detach the node at ``path`` from the active layer."""
        node = self.node_for_path(path)
        if node is None:
            raise TreePathError(path, "no such path")
        if node.is_root:
            raise TreePathError(path, "cannot remove the root")
        parent = self.node_for_path(node.parent_path)
        if parent is None:
            raise TreePathError(path, f"parent {node.parent_path} not found")
        parent.children = [child for child in parent.children if child is not node]
        logger.debug("removed %s", path)

    def visible_size(self) -> int:
        """Return the number of visible rows below the root row."""
        return count_visible(self.root)

    def set_layer_index(self, index: int) -> bool:
        """Activate layer ``index``; ``False`` when out of range or the layer cannot be walked."""
        if index < 0 or index >= len(self.layers):
            return False
        previous = self.layer_index
        self.layer_index = index
        if not self.apply_hidden_types():
            self.layer_index = previous
            return False
        return True

    def toggle_hidden_file_type(self, kind: DiffType) -> bool:
        """Flip visibility of every node whose diff type is ``kind``.

        Returns ``False`` and keeps the previous filters when the active layer
        cannot be walked.
        """
        self.hidden_types ^= {kind}
        if not self.apply_hidden_types():
            self.hidden_types ^= {kind}
            return False
        logger.debug("hidden diff types: %s", sorted(t.name for t in self.hidden_types))
        return True

    def apply_hidden_types(self) -> bool:
        """Mark hidden nodes of the active layer; ``False`` when the walk fails."""
        try:
            nodes = [node for node, depth in self.walk_parent_first() if depth > 0]
        except TraversalError as exc:
            logger.error("unable to apply file filters: %s", exc)
            return False
        for node in nodes:
            node.hidden = node.diff_type in self.hidden_types
        return True

    def string_between(self, lower: int, upper: int, show_attributes: bool) -> str:
        """Render visible rows ``[lower, upper)`` of the active layer."""
        rows: list[str] = []
        if upper <= lower:
            return ""
        for index, (node, depth) in enumerate(self.walk_parent_first(is_visible)):
            if index >= upper:
                break
            if index >= lower:
                rows.append(format_node_row(node, depth, show_attributes=show_attributes, theme=self.theme))
        return "\n".join(rows)
