"""Input-layer public API for key decoding, bindings, and dispatch."""

from .bindings import (
    DEFAULT_KEY_BINDINGS,
    KeyBinding,
    KeyBindingConfig,
    KeyBindingTable,
    parse_key_binding,
    parse_key_combo,
)
from .dispatcher import BoundAction, InputDispatcher, build_input_dispatcher
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "DEFAULT_KEY_BINDINGS",
    "KeyBinding",
    "KeyBindingConfig",
    "KeyBindingTable",
    "parse_key_binding",
    "parse_key_combo",
    "BoundAction",
    "InputDispatcher",
    "build_input_dispatcher",
]
