"""Tree node datatypes shared by the tree model and the navigation core."""

from __future__ import annotations

import enum
import posixpath
from dataclasses import dataclass, field


class DiffType(enum.IntEnum):
    """Change classification of a node relative to its baseline."""

    UNMODIFIED = 0
    MODIFIED = 1
    ADDED = 2
    REMOVED = 3


ROOT_PATH = "/"


def join_tree_path(parent_path: str, name: str) -> str:
    """Return the tree path of child ``name`` under ``parent_path``."""
    return posixpath.join(parent_path, name)


@dataclass(eq=False)
class Node:
    """One item of the browsed hierarchy.

    ``parent_path`` names the parent by tree path only; upward lookups go
    through ``TreeModel.node_for_path``. Navigation may mutate ``collapsed``
    and ``hidden`` in place and nothing else.
    """

    name: str
    path: str
    is_dir: bool
    parent_path: str | None = None
    collapsed: bool = False
    hidden: bool = False
    diff_type: DiffType = DiffType.UNMODIFIED
    size: int | None = None
    mode: str | None = None
    children: list[Node] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_path is None

    def add_child(self, child: Node) -> Node:
        """Append ``child`` and point its parent path at this node."""
        child.parent_path = self.path
        self.children.append(child)
        return child

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"Node({self.path!r}, {kind})"
