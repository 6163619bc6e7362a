"""Named key bindings and their textual configuration form.

A binding value is a comma-separated list of combos such as ``"ctrl+space"``
or ``"pgdn, J"``. Combos are normalized into the tokens ``read_key`` emits.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from ..errors import ConfigurationError

TOGGLE_COLLAPSE_DIR = "toggle-collapse-dir"
TOGGLE_COLLAPSE_ALL_DIR = "toggle-collapse-all-dir"
TOGGLE_FILETREE_ATTRIBUTES = "toggle-filetree-attributes"
TOGGLE_ADDED_FILES = "toggle-added-files"
TOGGLE_REMOVED_FILES = "toggle-removed-files"
TOGGLE_MODIFIED_FILES = "toggle-modified-files"
TOGGLE_UNMODIFIED_FILES = "toggle-unmodified-files"
PAGE_UP = "page-up"
PAGE_DOWN = "page-down"

DEFAULT_KEY_BINDINGS: dict[str, str] = {
    TOGGLE_COLLAPSE_DIR: "space",
    TOGGLE_COLLAPSE_ALL_DIR: "ctrl+space",
    TOGGLE_FILETREE_ATTRIBUTES: "ctrl+b",
    TOGGLE_ADDED_FILES: "ctrl+a",
    TOGGLE_REMOVED_FILES: "ctrl+r",
    TOGGLE_MODIFIED_FILES: "ctrl+n",
    TOGGLE_UNMODIFIED_FILES: "ctrl+u",
    PAGE_UP: "pgup",
    PAGE_DOWN: "pgdn",
}

_NAMED_KEYS = {
    "space": " ",
    "tab": "TAB",
    "enter": "ENTER_CR",
    "esc": "ESC",
    "escape": "ESC",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "pgup": "PAGE_UP",
    "pageup": "PAGE_UP",
    "pgdn": "PAGE_DOWN",
    "pagedown": "PAGE_DOWN",
    "home": "HOME",
    "end": "END",
}

# Control bytes the terminal reader reports under their own names.
_CTRL_ALIASES = {
    "h": "BACKSPACE",
    "i": "TAB",
    "j": "ENTER_LF",
    "m": "ENTER_CR",
}


@dataclass(frozen=True)
class KeyBinding:
    """One named action and the key tokens that trigger it."""

    name: str
    combos: tuple[str, ...]

    def match(self, key: str) -> bool:
        return key in self.combos


class KeyBindingConfig(Protocol):
    """Source of key bindings resolved once during tree-view setup."""

    def get_key_binding(self, name: str) -> KeyBinding:
        """Return binding ``name`` or raise ``ConfigurationError``."""
        ...


def parse_key_combo(text: str) -> str:
    """Translate one combo like ``"ctrl+a"`` into a key token.

    Raises ``ValueError`` for empty or unknown combos.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty key combo")
    if len(raw) == 1:
        return raw

    lowered = raw.lower()
    if lowered.startswith("ctrl+"):
        rest = lowered[len("ctrl+"):]
        if rest == "space":
            return "CTRL_SPACE"
        if rest in _CTRL_ALIASES:
            return _CTRL_ALIASES[rest]
        if len(rest) == 1 and "a" <= rest <= "z":
            return f"CTRL_{rest.upper()}"
        raise ValueError(f"unsupported ctrl combo: {text!r}")
    if lowered in _NAMED_KEYS:
        return _NAMED_KEYS[lowered]
    raise ValueError(f"unknown key: {text!r}")


def parse_key_binding(name: str, value: str) -> KeyBinding:
    """Parse a comma-separated binding value for action ``name``."""
    if not isinstance(value, str):
        raise ConfigurationError(name, f"binding must be a string, got {type(value).__name__}")
    # A lone "," binds the comma key itself.
    parts = [value] if value.strip() == "," else value.split(",")
    combos: list[str] = []
    for part in parts:
        try:
            token = parse_key_combo(part)
        except ValueError as exc:
            raise ConfigurationError(name, str(exc)) from exc
        if token not in combos:
            combos.append(token)
    return KeyBinding(name=name, combos=tuple(combos))


class KeyBindingTable:
    """Key-binding source layering config overrides over the defaults."""

    def __init__(self, overrides: Mapping[str, object] | None = None) -> None:
        self.overrides = dict(overrides or {})

    def get_key_binding(self, name: str) -> KeyBinding:
        if name in self.overrides:
            value = self.overrides[name]
        elif name in DEFAULT_KEY_BINDINGS:
            value = DEFAULT_KEY_BINDINGS[name]
        else:
            raise ConfigurationError(name, "no such key binding")
        return parse_key_binding(name, value)  # type: ignore[arg-type]
