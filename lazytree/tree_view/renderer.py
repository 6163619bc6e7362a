"""Paint the visible window of a tree model onto a character surface."""

from __future__ import annotations

import logging
import os
import sys
from typing import Protocol

from ..ansi import clip_ansi_line, display_width, selected_with_ansi
from ..errors import TraversalError
from ..tree_model.protocol import TreeModel
from ..ui_theme import DEFAULT_THEME, UITheme
from .state import NavigationState
from .viewport import ViewportWindow

logger = logging.getLogger(__name__)

# Attribute column is only requested on surfaces wider than this.
ATTRIBUTES_MIN_WIDTH = 80

STYLE_DEFAULT = "default"
STYLE_SELECTED = "selected"


class RenderSurface(Protocol):
    """Fixed-size character grid accepting styled single-line draws."""

    def inner_rect(self) -> tuple[int, int, int, int]:
        """Return ``(x, y, width, height)`` of the drawable area."""
        ...

    def draw_line(self, x: int, y: int, text: str, style: str) -> None:
        ...


class AnsiSurface:
    """Buffer one terminal frame as ANSI output and flush it in one write."""

    def __init__(self, width: int, height: int, x: int = 0, y: int = 0, theme: UITheme | None = None) -> None:
        self.x = x
        self.y = y
        self.width = max(1, width)
        self.height = max(1, height)
        self.theme = theme or DEFAULT_THEME
        self._out: list[str] = ["\033[H"]
        self._drawn_rows: set[int] = set()

    def inner_rect(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    def draw_line(self, x: int, y: int, text: str, style: str) -> None:
        clipped = clip_ansi_line(text, max(0, self.width - (x - self.x)))
        if style == STYLE_SELECTED:
            clipped = selected_with_ansi(clipped, self.theme.reverse)
        # Cursor positions are 1-based.
        self._out.append(f"\033[{y + 1};{x + 1}H{clipped}")
        if "\033" in clipped:
            self._out.append("\033[0m")
        self._out.append("\033[K")
        self._drawn_rows.add(y)

    def draw_status(self, y: int, text: str) -> None:
        """Draw a full-width status bar row."""
        clipped = clip_ansi_line(text, self.width)
        padding = " " * max(0, self.width - display_width(clipped))
        self._out.append(f"\033[{y + 1};{self.x + 1}H{self.theme.status_bar}{clipped}{padding}\033[0m")
        self._drawn_rows.add(y)

    def getvalue(self) -> str:
        """Return the frame, erasing rows of the drawable area that were not drawn."""
        blanks = [
            f"\033[{row + 1};{self.x + 1}H\033[K"
            for row in range(self.y, self.y + self.height)
            if row not in self._drawn_rows
        ]
        return "".join(self._out + blanks)

    def flush(self, fd: int | None = None) -> None:
        target = sys.stdout.fileno() if fd is None else fd
        os.write(target, self.getvalue().encode("utf-8", errors="replace"))
        self._out = ["\033[H"]
        self._drawn_rows = set()


class TreeViewRenderer:
    """Paint the current viewport rows, highlighting the selected one."""

    def __init__(self, tree: TreeModel) -> None:
        self.tree = tree

    def draw(
        self,
        surface: RenderSurface,
        state: NavigationState,
        viewport: ViewportWindow,
        show_attributes: bool,
    ) -> int:
        """Paint rows and return the number of lines drawn."""
        x, y, width, height = surface.inner_rect()
        selected_row = viewport.selected_row(state)
        lower, upper = viewport.visible_range(state)
        include_attributes = width > ATTRIBUTES_MIN_WIDTH and show_attributes
        try:
            tree_string = self.tree.string_between(lower, upper, include_attributes)
        except TraversalError as exc:
            logger.error("unable to render tree rows: %s", exc)
            return 0
        if not tree_string:
            return 0

        drawn = 0
        for row, line in enumerate(tree_string.split("\n")):
            if row >= height:
                break
            style = STYLE_SELECTED if row == selected_row else STYLE_DEFAULT
            surface.draw_line(x, y + row, line, style)
            drawn += 1
        return drawn
