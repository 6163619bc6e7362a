from __future__ import annotations

import unittest

from lazytree.errors import ConfigurationError
from lazytree.input import KeyBindingTable, build_input_dispatcher


class InputDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[str] = []

    def _action(self, label: str, result: bool = True):
        def run() -> bool:
            self.calls.append(label)
            return result

        return run

    def test_builtin_keys_dispatch(self) -> None:
        dispatcher = build_input_dispatcher(KeyBindingTable(), {"UP": self._action("up")}, [])
        self.assertTrue(dispatcher.dispatch("UP"))
        self.assertFalse(dispatcher.dispatch("DOWN"))
        self.assertEqual(self.calls, ["up"])

    def test_overlapping_bindings_all_fire_in_table_order(self) -> None:
        table = KeyBindingTable({"page-down": "J", "page-up": "J"})
        dispatcher = build_input_dispatcher(
            table,
            {},
            [("page-up", self._action("page-up")), ("page-down", self._action("page-down"))],
        )

        self.assertTrue(dispatcher.dispatch("J"))
        self.assertEqual(self.calls, ["page-up", "page-down"])

    def test_builtin_runs_before_bound_actions(self) -> None:
        table = KeyBindingTable({"page-down": "down"})
        dispatcher = build_input_dispatcher(
            table, {"DOWN": self._action("builtin")}, [("page-down", self._action("bound"))]
        )
        dispatcher.dispatch("DOWN")
        self.assertEqual(self.calls, ["builtin", "bound"])

    def test_result_reports_any_change(self) -> None:
        table = KeyBindingTable({"page-down": "x", "page-up": "x"})
        dispatcher = build_input_dispatcher(
            table,
            {},
            [("page-up", self._action("a", result=False)), ("page-down", self._action("b", result=True))],
        )
        self.assertTrue(dispatcher.dispatch("x"))

        quiet = build_input_dispatcher(table, {}, [("page-up", self._action("c", result=False))])
        self.assertFalse(quiet.dispatch("x"))

    def test_unresolvable_binding_aborts_build(self) -> None:
        table = KeyBindingTable({"page-down": "ctrl+9"})
        with self.assertRaises(ConfigurationError):
            build_input_dispatcher(
                table,
                {},
                [("page-up", self._action("up")), ("page-down", self._action("down"))],
            )
        self.assertEqual(self.calls, [])


if __name__ == "__main__":
    unittest.main()
