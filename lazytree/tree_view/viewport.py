"""Viewport arithmetic keeping the selected row inside the frame."""

from __future__ import annotations

from .state import NavigationState


class ViewportWindow:
    """Visible window ``[viewport_top, viewport_top + frame_height)`` over the tree rows."""

    def __init__(self, frame_height: int = 1) -> None:
        self.frame_height = max(1, frame_height)

    def resize(self, frame_height: int, state: NavigationState | None = None) -> None:
        """Change the frame height, scrolling so ``state``'s selection stays inside."""
        self.frame_height = max(1, frame_height)
        if state is None:
            return
        if state.selected_index < state.viewport_top:
            state.viewport_top = state.selected_index
        elif state.selected_index >= self.upper_bound(state):
            state.viewport_top = state.selected_index - self.frame_height + 1

    def upper_bound(self, state: NavigationState) -> int:
        return state.viewport_top + self.frame_height

    def visible_range(self, state: NavigationState) -> tuple[int, int]:
        return state.viewport_top, self.upper_bound(state)

    def selected_row(self, state: NavigationState) -> int:
        return state.selected_index - state.viewport_top

    def follow_down(self, state: NavigationState) -> None:
        """Scroll one row when the selection stepped below the frame."""
        if state.selected_index - state.viewport_top >= self.frame_height:
            state.viewport_top += 1

    def follow_up(self, state: NavigationState) -> None:
        """Scroll one row when the selection stepped above the frame."""
        if state.selected_index < state.viewport_top:
            state.viewport_top -= 1

    def snap_up(self, state: NavigationState) -> None:
        """Move the frame top straight to a selection that jumped above it."""
        if state.selected_index < state.viewport_top:
            state.viewport_top = state.selected_index

    def page_down_scroll(self, state: NavigationState, visible_size: int) -> None:
        """Scroll after a page jump, leaving no blank trailing row when possible."""
        if state.selected_index >= self.upper_bound(state):
            state.viewport_top = min(state.selected_index, visible_size - self.frame_height + 1)

    def clamp(self, state: NavigationState, visible_size: int) -> None:
        """Pull selection and frame back inside ``[0, visible_size]``."""
        state.selected_index = max(0, min(state.selected_index, visible_size))
        if state.selected_index < state.viewport_top:
            state.viewport_top = state.selected_index
        elif state.selected_index >= self.upper_bound(state):
            state.viewport_top = state.selected_index - self.frame_height + 1
        max_top = max(0, visible_size - self.frame_height + 1)
        state.viewport_top = max(0, min(state.viewport_top, max_top))
