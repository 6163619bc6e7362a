"""Depth-first walks and visible-index resolution over a node hierarchy.

Walks are lazy generators of ``(node, depth)`` pairs. An evaluator receives
each node together with the ancestor the walk reached it from and prunes the
node (and its subtree) by returning ``False``.

Visible indices are never stored. ``resolve_node_at`` and
``resolve_index_of`` recount from the root on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from ..errors import TraversalError
from .types import Node

if TYPE_CHECKING:
    from .protocol import TreeModel

logger = logging.getLogger(__name__)

Evaluator = Callable[[Node, "Node | None"], bool]


def visit_all(_node: Node, _parent: Node | None) -> bool:
    """Evaluator that keeps every node."""
    return True


def is_visible(node: Node, parent: Node | None) -> bool:
    """Return whether ``node`` is shown given the parent it hangs under."""
    if parent is not None and parent.collapsed:
        return False
    return not node.hidden


def _check_child(child: Node, parent: Node, seen: set[int]) -> None:
    if id(child) in seen:
        raise TraversalError(child.path, "node reached twice")
    if child.parent_path != parent.path:
        raise TraversalError(
            child.path,
            f"parent path {child.parent_path!r} does not match {parent.path!r}",
        )


def walk_parent_first(root: Node, evaluator: Evaluator = visit_all) -> Iterator[tuple[Node, int]]:
    """Yield retained nodes parent-first, pruning subtrees the evaluator rejects.

    Raises ``TraversalError`` when the hierarchy is inconsistent.
    """
    if not evaluator(root, None):
        return
    seen: set[int] = {id(root)}
    stack: list[tuple[Node, Node | None, int]] = [(root, None, 0)]
    while stack:
        node, _parent, depth = stack.pop()
        yield node, depth
        pending: list[tuple[Node, Node | None, int]] = []
        for child in node.children:
            _check_child(child, node, seen)
            seen.add(id(child))
            if evaluator(child, node):
                pending.append((child, node, depth + 1))
        stack.extend(reversed(pending))


def walk_child_first(root: Node, evaluator: Evaluator = visit_all) -> Iterator[tuple[Node, int]]:
    """Yield retained nodes with every child before its parent."""
    if not evaluator(root, None):
        return
    seen: set[int] = {id(root)}

    def _walk(node: Node, depth: int) -> Iterator[tuple[Node, int]]:
        for child in node.children:
            _check_child(child, node, seen)
            seen.add(id(child))
            if evaluator(child, node):
                yield from _walk(child, depth + 1)
        yield node, depth

    yield from _walk(root, 0)


def iter_visible(tree: TreeModel) -> Iterator[tuple[int, Node]]:
    """Enumerate visible nodes of ``tree`` with their visible index."""
    for index, (node, _depth) in enumerate(tree.walk_parent_first(is_visible)):
        yield index, node


def resolve_node_at(tree: TreeModel, index: int) -> Node | None:
    """Return the visible node at ``index`` or ``None`` when absent.

    Traversal failures are logged and reported as "not found".
    """
    if index < 0:
        return None
    try:
        for position, node in iter_visible(tree):
            if position == index:
                return node
    except TraversalError as exc:
        logger.error("unable to get node position: %s", exc)
    return None


def resolve_index_of(tree: TreeModel, predicate: Callable[[Node], bool]) -> int | None:
    """Return the visible index of the first node matching ``predicate``."""
    try:
        for position, node in iter_visible(tree):
            if predicate(node):
                return position
    except TraversalError as exc:
        logger.error("unable to resolve node index: %s", exc)
    return None


def count_visible(root: Node) -> int:
    """Count visible rows below ``root`` (the root row itself is excluded)."""
    total = sum(1 for _ in walk_parent_first(root, is_visible))
    return max(0, total - 1)
