"""Navigation actions over the visible rows of a tree model.

Every action recomputes visible positions by walking the tree; nothing is
cached between keypresses. Actions return ``True`` when they changed
something and ``False`` for silent no-ops.
"""

from __future__ import annotations

import logging

from ..errors import TraversalError
from ..tree_model.protocol import TreeModel
from ..tree_model.traversal import resolve_index_of, resolve_node_at, visit_all
from ..tree_model.types import DiffType, Node
from .state import NavigationState
from .viewport import ViewportWindow

logger = logging.getLogger(__name__)

RESYNC_CLAMP = "clamp"
RESYNC_NONE = "none"
RESYNC_POLICIES = (RESYNC_CLAMP, RESYNC_NONE)


class TreeNavigator:
    """Apply navigation actions to a ``NavigationState`` for one tree model.

    ``resync_policy`` decides what happens to the selection after the visible
    set changes in bulk (filter toggles, collapse/expand all): ``"clamp"``
    pulls it back into range, ``"none"`` leaves it untouched.
    """

    def __init__(
        self,
        tree: TreeModel,
        state: NavigationState | None = None,
        viewport: ViewportWindow | None = None,
        resync_policy: str = RESYNC_CLAMP,
    ) -> None:
        if resync_policy not in RESYNC_POLICIES:
            raise ValueError(f"unknown resync policy: {resync_policy!r}")
        self.tree = tree
        self.state = state if state is not None else NavigationState()
        self.viewport = viewport if viewport is not None else ViewportWindow()
        self.resync_policy = resync_policy

    def selected_node(self) -> Node | None:
        """Return the node under the selection, or ``None``."""
        return resolve_node_at(self.tree, self.state.selected_index)

    def _log_position(self, action: str) -> None:
        logger.debug(
            "%s: selected_index=%d viewport_top=%d frame_height=%d",
            action,
            self.state.selected_index,
            self.state.viewport_top,
            self.viewport.frame_height,
        )

    def visible_size(self) -> int | None:
        """Return the tree's visible size, or ``None`` when the tree cannot be walked."""
        try:
            return self.tree.visible_size()
        except TraversalError as exc:
            logger.error("unable to count visible nodes: %s", exc)
            return None

    def _resync(self) -> None:
        if self.resync_policy != RESYNC_CLAMP:
            return
        visible_size = self.visible_size()
        if visible_size is not None:
            self.viewport.clamp(self.state, visible_size)

    def move_down(self) -> bool:
        visible_size = self.visible_size()
        state = self.state
        if visible_size is None or state.selected_index >= visible_size:
            return False
        state.selected_index += 1
        self.viewport.follow_down(state)
        self._log_position("move_down")
        return True

    def move_up(self) -> bool:
        state = self.state
        if state.selected_index <= 0:
            return False
        state.selected_index -= 1
        self.viewport.follow_up(state)
        self._log_position("move_up")
        return True

    def move_right(self) -> bool:
        """Expand the selected directory (if collapsed) and step onto its first row."""
        node = self.selected_node()
        if node is None or not node.is_dir or not any(not child.hidden for child in node.children):
            return False
        if node.collapsed:
            logger.debug("expanding node %s", node.path)
            node.collapsed = False
        self.state.selected_index += 1
        self.viewport.follow_down(self.state)
        self._log_position("move_right")
        return True

    def move_left(self) -> bool:
        """Select the parent of the selected node."""
        node = self.selected_node()
        if node is None or node.is_root:
            return False
        parent_path = node.parent_path
        new_index = resolve_index_of(self.tree, lambda candidate: candidate.path == parent_path)
        if new_index is None:
            logger.debug("parent %s of %s is not visible", parent_path, node.path)
            return False
        self.state.selected_index = new_index
        self.viewport.snap_up(self.state)
        self._log_position("move_left")
        return True

    def page_down(self) -> bool:
        visible_size = self.visible_size()
        if visible_size is None:
            return False
        state = self.state
        state.selected_index = min(state.selected_index + self.viewport.frame_height, visible_size)
        self.viewport.page_down_scroll(state, visible_size)
        self._log_position("page_down")
        return True

    def page_up(self) -> bool:
        state = self.state
        state.selected_index = max(0, state.selected_index - self.viewport.frame_height)
        self.viewport.snap_up(state)
        self._log_position("page_up")
        return True

    def collapse_dir(self) -> bool:
        """Flip the collapsed flag of the selected directory."""
        node = self.selected_node()
        if node is not None and node.is_dir:
            logger.debug("collapsing node %s", node.path)
            node.collapsed = not node.collapsed
            return True
        if node is not None:
            logger.debug("unable to collapse node %s (not a directory)", node.path)
        else:
            logger.debug("unable to collapse missing node")
        return False

    def collapse_or_expand_all(self) -> bool:
        """Set every directory below the root to the toggle value, then flip the toggle.

        Manual per-directory state is overwritten.
        """
        target = self.state.collapse_all_toggle
        directories: list[Node] = []
        try:
            for node, depth in self.tree.walk_parent_first(visit_all):
                if depth > 0 and node.is_dir:
                    directories.append(node)
        except TraversalError as exc:
            logger.error("error collapsing all dirs: %s", exc)
            return False
        for node in directories:
            node.collapsed = target
        self.state.collapse_all_toggle = not target
        self._resync()
        self._log_position("collapse_or_expand_all")
        return True

    def toggle_hidden_file_type(self, kind: DiffType) -> bool:
        if not self.tree.toggle_hidden_file_type(kind):
            return False
        self._resync()
        return True
