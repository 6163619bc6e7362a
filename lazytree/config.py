"""Persistent JSON config helpers.

Stores key-binding overrides, theme, attribute-column preference, the
selection resync policy, and the log level. All reads are defensive:
malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .input.bindings import KeyBindingTable
from .tree_view.navigator import RESYNC_CLAMP, RESYNC_POLICIES

logger = logging.getLogger(__name__)

APP_NAME = "lazytree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("unable to write config %s: %s", CONFIG_PATH, exc)


def load_key_bindings() -> KeyBindingTable:
    """Return the binding table with any ``keybindings`` overrides applied.

    Override values are validated lazily by ``KeyBindingTable.get_key_binding``.
    """
    value = load_config().get("keybindings")
    if not isinstance(value, dict):
        return KeyBindingTable()
    overrides = {key: binding for key, binding in value.items() if isinstance(key, str)}
    return KeyBindingTable(overrides)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_preferences(theme_name: str, show_attributes: bool, filter_resync: str) -> None:
    """Persist display preferences, keeping other keys such as ``keybindings``."""
    config = load_config()
    stripped = str(theme_name).strip()
    if stripped:
        config["theme"] = stripped
    config["show_attributes"] = bool(show_attributes)
    if filter_resync in RESYNC_POLICIES:
        config["filter_resync"] = filter_resync
    save_config(config)


def load_show_attributes() -> bool:
    """Return the attribute-column preference (default ``True``)."""
    value = load_config().get("show_attributes")
    return value if isinstance(value, bool) else True


def load_filter_resync() -> str:
    """Return the selection resync policy used after visibility changes."""
    value = load_config().get("filter_resync")
    if isinstance(value, str) and value.strip().lower() in RESYNC_POLICIES:
        return value.strip().lower()
    return RESYNC_CLAMP


def load_log_level() -> str | None:
    """Return a valid logging level name from config, if any."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return None
    candidate = value.strip().upper()
    return candidate if candidate in _LOG_LEVELS else None
