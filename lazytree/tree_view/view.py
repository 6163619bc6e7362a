"""Tree view component: navigation state, key dispatch, and painting."""

from __future__ import annotations

import logging

from ..input import bindings
from ..input.bindings import KeyBindingConfig
from ..input.dispatcher import InputDispatcher, KeyAction, build_input_dispatcher
from ..tree_model.protocol import TreeModel
from ..tree_model.types import DiffType
from .navigator import RESYNC_CLAMP, TreeNavigator
from .renderer import RenderSurface, TreeViewRenderer
from .state import NavigationState
from .viewport import ViewportWindow

logger = logging.getLogger(__name__)


class TreeView:
    """Browse a tree model inside a fixed-height frame.

    Call ``setup`` once before ``handle_key``; ``draw`` can run at any time.
    """

    def __init__(
        self,
        tree: TreeModel,
        frame_height: int = 1,
        show_attributes: bool = True,
        resync_policy: str = RESYNC_CLAMP,
    ) -> None:
        self.tree = tree
        self.state = NavigationState()
        self.viewport = ViewportWindow(frame_height)
        self.navigator = TreeNavigator(tree, self.state, self.viewport, resync_policy=resync_policy)
        self.renderer = TreeViewRenderer(tree)
        self.show_attributes = show_attributes
        self.dispatcher: InputDispatcher | None = None
        self.layer_index = 0

    def setup(self, config: KeyBindingConfig) -> TreeView:
        """Select the first layer and resolve key bindings.

        Raises ``ConfigurationError`` when any binding cannot be resolved.
        """
        self.tree.set_layer_index(0)
        self.layer_index = 0
        nav = self.navigator
        builtin: dict[str, KeyAction] = {
            "UP": nav.move_up,
            "DOWN": nav.move_down,
            "RIGHT": nav.move_right,
            "LEFT": nav.move_left,
            "TAB": self.next_layer,
        }
        actions: list[tuple[str, KeyAction]] = [
            (bindings.TOGGLE_COLLAPSE_DIR, nav.collapse_dir),
            (bindings.TOGGLE_COLLAPSE_ALL_DIR, nav.collapse_or_expand_all),
            (bindings.TOGGLE_FILETREE_ATTRIBUTES, self.toggle_attributes),
            (bindings.TOGGLE_ADDED_FILES, lambda: nav.toggle_hidden_file_type(DiffType.ADDED)),
            (bindings.TOGGLE_REMOVED_FILES, lambda: nav.toggle_hidden_file_type(DiffType.REMOVED)),
            (bindings.TOGGLE_MODIFIED_FILES, lambda: nav.toggle_hidden_file_type(DiffType.MODIFIED)),
            (bindings.TOGGLE_UNMODIFIED_FILES, lambda: nav.toggle_hidden_file_type(DiffType.UNMODIFIED)),
            (bindings.PAGE_UP, nav.page_up),
            (bindings.PAGE_DOWN, nav.page_down),
        ]
        self.dispatcher = build_input_dispatcher(config, builtin, actions)
        return self

    def next_layer(self) -> bool:
        """Switch to the next workspace root, wrapping to the first one."""
        target = self.layer_index + 1
        if not self.tree.set_layer_index(target):
            target = 0
            if self.layer_index == 0 or not self.tree.set_layer_index(0):
                return False
        self.layer_index = target
        self.state.selected_index = 0
        self.state.viewport_top = 0
        logger.debug("switched to layer %d", target)
        return True

    def toggle_attributes(self) -> bool:
        self.show_attributes = not self.show_attributes
        return True

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; return whether anything changed."""
        if self.dispatcher is None:
            raise RuntimeError("TreeView.setup() must run before handling keys")
        return self.dispatcher.dispatch(key)

    def draw(self, surface: RenderSurface) -> int:
        """Paint the current window; the frame height follows the surface."""
        _x, _y, _width, height = surface.inner_rect()
        self.viewport.resize(height, self.state)
        return self.renderer.draw(surface, self.state, self.viewport, self.show_attributes)
