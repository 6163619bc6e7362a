"""Regression tests for raw-key decoding.

Covers ESC timing, arrow and paging sequences, and control-key token mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from lazytree.input import parse_key_binding, parse_key_combo
from lazytree.input import reader as input_mod


def _read_keys(data: bytes, count: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        keys = _read_keys(b"\x1b[A\x1b[B\x1b[C\x1b[D", count=4)
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_application_mode_arrows_are_recognized(self) -> None:
        self.assertEqual(_read_keys(b"\x1bOA\x1bOB", count=2), ["UP", "DOWN"])

    def test_page_keys_are_recognized(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[5~\x1b[6~", count=2), ["PAGE_UP", "PAGE_DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_keys(b"\x1ba", count=2), ["ESC", "a"])

    def test_ctrl_space_is_recognized(self) -> None:
        self.assertEqual(_read_keys(b"\x00"), ["CTRL_SPACE"])

    def test_ctrl_letters_are_recognized(self) -> None:
        keys = _read_keys(b"\x01\x02\x0e\x12\x15", count=5)
        self.assertEqual(keys, ["CTRL_A", "CTRL_B", "CTRL_N", "CTRL_R", "CTRL_U"])

    def test_special_control_bytes_keep_their_names(self) -> None:
        keys = _read_keys(b"\t\r\x7f", count=3)
        self.assertEqual(keys, ["TAB", "ENTER_CR", "BACKSPACE"])

    def test_space_and_utf8_characters(self) -> None:
        self.assertEqual(_read_keys(" é".encode("utf-8"), count=2), [" ", "é"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(_read_keys(b""), [""])


class BindingMatchesReaderTests(unittest.TestCase):
    """Every configurable combo must match the token the reader produces for it."""

    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _assert_binding_matches(self, combo: str, data: bytes) -> None:
        binding = parse_key_binding("page-up", combo)
        (token,) = _read_keys(data)
        self.assertTrue(binding.match(token), f"{combo!r} does not match {token!r}")

    def test_every_ctrl_letter_matches_its_control_byte(self) -> None:
        for letter in "abcdefghijklmnopqrstuvwxyz":
            with self.subTest(letter=letter):
                self._assert_binding_matches(f"ctrl+{letter}", bytes([ord(letter) - 96]))
        self._assert_binding_matches("ctrl+space", b"\x00")

    def test_named_keys_match_their_sequences(self) -> None:
        cases = {
            "space": b" ",
            "tab": b"\t",
            "enter": b"\r",
            "backspace": b"\x7f",
            "up": b"\x1b[A",
            "down": b"\x1b[B",
            "right": b"\x1b[C",
            "left": b"\x1b[D",
            "pgup": b"\x1b[5~",
            "pgdn": b"\x1b[6~",
            "home": b"\x1b[H",
            "end": b"\x1b[F",
            "esc": b"\x1b",
        }
        for combo, data in cases.items():
            with self.subTest(combo=combo):
                self._assert_binding_matches(combo, data)

    def test_ctrl_aliases_resolve_to_reader_names(self) -> None:
        self.assertEqual(parse_key_combo("ctrl+h"), "BACKSPACE")
        self.assertEqual(parse_key_combo("ctrl+i"), "TAB")
        self.assertEqual(parse_key_combo("ctrl+j"), "ENTER_LF")
        self.assertEqual(parse_key_combo("ctrl+m"), "ENTER_CR")


if __name__ == "__main__":
    unittest.main()
