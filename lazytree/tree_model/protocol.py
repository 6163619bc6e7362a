"""Capability contract the navigation core expects from a tree backend."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from .traversal import Evaluator
from .types import DiffType, Node


@runtime_checkable
class TreeModel(Protocol):
    """Operations a tree backend offers to the tree view.

    Any object providing these methods works; there is no base class.
    """

    def string_between(self, lower: int, upper: int, show_attributes: bool) -> str:
        """Return formatted visible rows ``[lower, upper)`` joined by newlines."""
        ...

    def walk_parent_first(self, evaluator: Evaluator) -> Iterator[tuple[Node, int]]:
        ...

    def walk_child_first(self, evaluator: Evaluator) -> Iterator[tuple[Node, int]]:
        ...

    def node_for_path(self, path: str) -> Node | None:
        ...

    def remove_path(self, path: str) -> None:
        ...

    def visible_size(self) -> int:
        ...

    def set_layer_index(self, index: int) -> bool:
        ...

    def toggle_hidden_file_type(self, kind: DiffType) -> bool:
        ...
