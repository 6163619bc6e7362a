"""Exception types shared across lazytree modules.

Only configuration failures are meant to abort the program. Traversal and
path errors are raised by the tree model and handled by its callers.
"""

from __future__ import annotations


class LazyTreeError(Exception):
    """Base exception for lazytree errors."""


class ConfigurationError(LazyTreeError):
    """Raised when a key binding (or other setting) cannot be resolved."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"setup error during {name}: {reason}")


class TraversalError(LazyTreeError):
    """Raised when a tree walk finds a structurally inconsistent tree."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"traversal failed at {path}: {reason}")


class TreePathError(LazyTreeError):
    """Raised when a tree path cannot be found or removed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
