"""Tree nodes, traversal, and the filesystem-backed tree model.

``TreeModel`` is the contract the tree view consumes; ``FileTree`` is the
concrete backend used by the CLI.
"""

from __future__ import annotations

from .build import aggregate_directory_diff_types, build_node_tree, ensure_path
from .file_tree import FileTree
from .protocol import TreeModel
from .rendering import file_color_for, format_node_row
from .traversal import (
    count_visible,
    is_visible,
    iter_visible,
    resolve_index_of,
    resolve_node_at,
    visit_all,
    walk_child_first,
    walk_parent_first,
)
from .types import DiffType, Node

__all__ = [
    "DiffType",
    "Node",
    "TreeModel",
    "FileTree",
    "build_node_tree",
    "ensure_path",
    "aggregate_directory_diff_types",
    "format_node_row",
    "file_color_for",
    "walk_parent_first",
    "walk_child_first",
    "visit_all",
    "is_visible",
    "iter_visible",
    "count_visible",
    "resolve_node_at",
    "resolve_index_of",
]
