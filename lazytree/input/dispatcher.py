"""Key dispatch for the tree view.

Arrow keys are always wired. Every other action comes from a binding table
resolved once at setup; a binding that fails to resolve aborts setup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from .bindings import KeyBinding, KeyBindingConfig

logger = logging.getLogger(__name__)

KeyAction = Callable[[], bool]


@dataclass(frozen=True)
class BoundAction:
    """A resolved binding paired with its action callback."""

    binding: KeyBinding
    action: KeyAction


class InputDispatcher:
    """Route key tokens to navigation actions.

    Built-in keys dispatch first; then every bound action whose binding
    matches fires, in table order. Overlapping bindings all fire.
    """

    def __init__(self, builtin: Mapping[str, KeyAction], bound: Sequence[BoundAction]) -> None:
        self._builtin = dict(builtin)
        self._bound = tuple(bound)

    @property
    def bound_actions(self) -> tuple[BoundAction, ...]:
        return self._bound

    def dispatch(self, key: str) -> bool:
        """Run every action matching ``key``; return whether any reported a change."""
        changed = False
        handler = self._builtin.get(key)
        if handler is not None:
            changed = bool(handler()) or changed
        for entry in self._bound:
            if entry.binding.match(key):
                logger.debug("key %r -> %s", key, entry.binding.name)
                changed = bool(entry.action()) or changed
        return changed


def build_input_dispatcher(
    config: KeyBindingConfig,
    builtin: Mapping[str, KeyAction],
    actions: Sequence[tuple[str, KeyAction]],
) -> InputDispatcher:
    """Resolve ``actions`` (name, callback) against ``config`` in order.

    ``ConfigurationError`` from the config propagates; no partially bound
    dispatcher is ever returned.
    """
    bound: list[BoundAction] = []
    for name, action in actions:
        binding = config.get_key_binding(name)
        bound.append(BoundAction(binding=binding, action=action))
    return InputDispatcher(builtin, bound)
