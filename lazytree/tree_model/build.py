"""Filesystem scanning into ``Node`` hierarchies."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from ..gitignore import GitIgnoreMatcher
from .traversal import walk_child_first
from .types import ROOT_PATH, DiffType, Node, join_tree_path

logger = logging.getLogger(__name__)


def _sort_key(node: Node) -> tuple[int, str, str]:
    return (0 if node.is_dir else 1, node.name.casefold(), node.name)


def sort_children(node: Node) -> None:
    """Order children directories first, then case-folded name."""
    node.children.sort(key=_sort_key)


def _stat_fields(entry: os.DirEntry[str]) -> tuple[int | None, str | None]:
    try:
        st = entry.stat(follow_symlinks=False)
    except OSError:
        return None, None
    return int(st.st_size), stat.filemode(st.st_mode)


def _scan_directory(
    node: Node,
    directory: Path,
    show_hidden: bool,
    ignore_matcher: GitIgnoreMatcher | None,
    diff_types: dict[Path, DiffType],
    collapsed: bool,
) -> None:
    try:
        with os.scandir(directory) as entries:
            scanned = list(entries)
    except OSError as exc:
        logger.warning("unable to scan %s: %s", directory, exc)
        return

    for entry in scanned:
        name = entry.name
        if not show_hidden and name.startswith("."):
            continue
        child_fs_path = directory / name
        if ignore_matcher is not None and ignore_matcher.is_ignored(child_fs_path):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        size, mode = _stat_fields(entry)
        child = node.add_child(
            Node(
                name=name,
                path=join_tree_path(node.path, name),
                is_dir=is_dir,
                collapsed=collapsed if is_dir else False,
                diff_type=diff_types.get(child_fs_path, DiffType.UNMODIFIED),
                size=None if is_dir else size,
                mode=mode,
            )
        )
        if is_dir:
            _scan_directory(child, child_fs_path, show_hidden, ignore_matcher, diff_types, collapsed)
    sort_children(node)


def ensure_path(root: Node, parts: Iterable[str], is_dir: bool, diff_type: DiffType) -> Node:
    """Return the node at ``parts`` below ``root``, creating missing entries.

    Missing intermediate directories inherit ``diff_type``; existing nodes are
    left untouched.
    """
    parts = list(parts)
    current = root
    for position, name in enumerate(parts):
        existing = next((child for child in current.children if child.name == name), None)
        if existing is None:
            leaf = position == len(parts) - 1
            existing = current.add_child(
                Node(
                    name=name,
                    path=join_tree_path(current.path, name),
                    is_dir=is_dir if leaf else True,
                    diff_type=diff_type,
                )
            )
            sort_children(current)
        current = existing
    return current


def aggregate_directory_diff_types(root: Node) -> None:
    """Derive directory diff types from their children, bottom-up.

    Uniform children give the directory their type; mixed children mark it
    modified. Empty directories keep their own type.
    """
    for node, _depth in walk_child_first(root):
        if not node.is_dir or not node.children:
            continue
        kinds = {child.diff_type for child in node.children}
        if len(kinds) == 1:
            node.diff_type = kinds.pop()
        else:
            node.diff_type = DiffType.MODIFIED


def build_node_tree(
    root: Path,
    show_hidden: bool = False,
    ignore_matcher: GitIgnoreMatcher | None = None,
    diff_types: dict[Path, DiffType] | None = None,
    collapsed: bool = False,
) -> Node:
    """Scan ``root`` recursively and return its ``Node`` hierarchy.

    ``diff_types`` maps resolved filesystem paths to change kinds; removed
    paths that no longer exist on disk become synthetic nodes.
    """
    root = root.resolve()
    diff_types = diff_types or {}
    tree_root = Node(name=root.name or str(root), path=ROOT_PATH, is_dir=True, parent_path=None)
    _scan_directory(tree_root, root, show_hidden, ignore_matcher, diff_types, collapsed)

    for fs_path, diff_type in diff_types.items():
        if diff_type != DiffType.REMOVED or fs_path.exists():
            continue
        try:
            parts = fs_path.relative_to(root).parts
        except ValueError:
            continue
        if not parts:
            continue
        ensure_path(tree_root, parts, is_dir=False, diff_type=DiffType.REMOVED)

    aggregate_directory_diff_types(tree_root)
    # The root row stays neutral so it is never filtered away.
    tree_root.diff_type = DiffType.UNMODIFIED
    logger.debug("built tree for %s", root)
    return tree_root
