"""Main interactive event loop for the terminal UI.

One thread reads a key, lets the tree view act on it, and repaints when
something changed. Resizes are picked up by polling between keys.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable

from ..input import read_key
from ..terminal import TerminalController
from ..tree_view import AnsiSurface, TreeView
from ..ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "CTRL_C"})
RESIZE_POLL_MS = 200
STATUS_ROWS = 1


def status_text(view: TreeView, label: str) -> str:
    """Return the status-bar text for the current selection."""
    visible_size = view.navigator.visible_size()
    total = "?" if visible_size is None else str(visible_size)
    position = f"{view.state.selected_index}/{total}"
    return f" {label}  ({position})" if label else f" ({position})"


def render_frame(
    view: TreeView,
    columns: int,
    rows: int,
    theme: UITheme | None = None,
    status_label: str = "",
) -> AnsiSurface:
    """Paint tree rows plus the status bar into a fresh surface."""
    content_rows = max(1, rows - STATUS_ROWS)
    surface = AnsiSurface(columns, content_rows, theme=theme or DEFAULT_THEME)
    view.draw(surface)
    surface.draw_status(content_rows, status_text(view, status_label))
    return surface


def run_main_loop(
    view: TreeView,
    terminal: TerminalController,
    stdin_fd: int,
    stdout_fd: int,
    theme: UITheme | None = None,
    status_label: str | Callable[[], str] = "",
    terminal_size: Callable[[], os.terminal_size] | None = None,
) -> None:
    """Run the interactive loop until a quit key arrives."""
    get_size = terminal_size or (lambda: shutil.get_terminal_size((80, 24)))
    dirty = True
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            size = get_size()
            current_size = (size.columns, size.lines)
            if current_size != last_size:
                logger.debug("terminal size %dx%d", *current_size)
                last_size = current_size
                dirty = True

            if dirty:
                label = status_label() if callable(status_label) else status_label
                render_frame(view, size.columns, size.lines, theme, label).flush(stdout_fd)
                dirty = False

            key = read_key(stdin_fd, timeout_ms=RESIZE_POLL_MS)
            if not key:
                continue
            if key in QUIT_KEYS:
                return
            if view.handle_key(key):
                dirty = True
