"""Formatting helpers for tree rows."""

from __future__ import annotations

from functools import lru_cache

from pygments.lexers import find_lexer_class_for_filename

from ..ui_theme import DEFAULT_THEME, UITheme
from .types import DiffType, Node

ATTRIBUTE_COLUMN_WIDTH = 20
_SIZE_UNITS = ("B", "K", "M", "G", "T")


@lru_cache(maxsize=1024)
def _lexer_name_for(filename: str) -> str | None:
    lexer_class = find_lexer_class_for_filename(filename)
    if lexer_class is None:
        return None
    return lexer_class.name


def file_color_for(node: Node, theme: UITheme | None = None) -> str:
    """Return ANSI color for a file row based on diff type, then language."""
    active_theme = theme or DEFAULT_THEME
    if node.diff_type == DiffType.ADDED:
        return active_theme.diff_added
    if node.diff_type == DiffType.REMOVED:
        return active_theme.diff_removed
    if node.diff_type == DiffType.MODIFIED:
        return active_theme.diff_modified
    if node.is_dir:
        return active_theme.tree_dir
    lexer_name = _lexer_name_for(node.name)
    if lexer_name is None:
        return active_theme.tree_file_default
    if lexer_name.startswith("Python"):
        return active_theme.tree_file_python
    return active_theme.tree_file_source


def human_size(size: int | None) -> str:
    """Return a compact size label such as ``4.2K``."""
    if size is None:
        return "-"
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)}{unit}"
            return f"{value:.1f}{unit}"
        value /= 1024
    return f"{size}B"


def format_attributes(node: Node) -> str:
    """Return the fixed-width attribute column (mode and size)."""
    mode = node.mode or "-"
    size = "" if node.is_dir else human_size(node.size)
    return f"{mode:<11}{size:>8} "[:ATTRIBUTE_COLUMN_WIDTH]


def format_node_row(
    node: Node,
    depth: int,
    show_attributes: bool = False,
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    prefix = ""
    if show_attributes:
        prefix = f"{active_theme.tree_attributes}{format_attributes(node)}{reset}"

    color = file_color_for(node, active_theme)
    if node.is_dir:
        marker = "▸ " if node.collapsed else "▾ "
        name = f"{node.name}/" if node.name != "/" else "/"
        indent = "  " * depth
        return f"{prefix}{indent}{active_theme.tree_marker}{marker}{reset}{color}{name}{reset}"

    # File names line up with sibling directory names (past the arrow column).
    indent = "  " * depth
    return f"{prefix}{indent}  {color}{node.name}{reset}"
