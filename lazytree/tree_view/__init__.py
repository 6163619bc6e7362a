"""Tree view: navigation state, viewport, renderer, and the view component."""

from __future__ import annotations

from .navigator import RESYNC_CLAMP, RESYNC_NONE, RESYNC_POLICIES, TreeNavigator
from .renderer import ATTRIBUTES_MIN_WIDTH, AnsiSurface, RenderSurface, TreeViewRenderer
from .state import NavigationState
from .view import TreeView
from .viewport import ViewportWindow

__all__ = [
    "NavigationState",
    "ViewportWindow",
    "TreeNavigator",
    "TreeViewRenderer",
    "RenderSurface",
    "AnsiSurface",
    "ATTRIBUTES_MIN_WIDTH",
    "TreeView",
    "RESYNC_CLAMP",
    "RESYNC_NONE",
    "RESYNC_POLICIES",
]
