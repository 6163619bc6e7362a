"""Interactive runtime: the terminal event loop."""

from __future__ import annotations

from .loop import QUIT_KEYS, render_frame, run_main_loop, status_text

__all__ = ["QUIT_KEYS", "render_frame", "run_main_loop", "status_text"]
