"""Selection/scroll state of one tree view."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NavigationState:
    """Selection index, viewport top, and the collapse-all toggle.

    Lives as long as its tree view. Only ``TreeNavigator`` mutates it.
    """

    selected_index: int = 0
    viewport_top: int = 0
    collapse_all_toggle: bool = True
