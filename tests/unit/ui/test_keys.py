"""Tests for key normalization."""

import pytest
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from cloudgate.models.messages import KeyEvent
from cloudgate.ui.keys import to_key_events


class TestToKeyEvents:
    """Test suite for to_key_events."""

    @pytest.mark.parametrize(
        ("key_press", "expected"),
        [
            (KeyPress(Keys.ControlM, "\r"), "enter"),
            (KeyPress(Keys.ControlJ, "\n"), "enter"),
            (KeyPress(Keys.Escape, "\x1b"), "esc"),
            (KeyPress(Keys.Up), "up"),
            (KeyPress(Keys.Down), "down"),
            (KeyPress(Keys.PageUp), "pgup"),
            (KeyPress(Keys.PageDown), "pgdown"),
            (KeyPress(Keys.Home), "home"),
            (KeyPress(Keys.End), "end"),
            (KeyPress(Keys.ControlI, "\t"), "tab"),
            (KeyPress(Keys.ControlH, "\x7f"), "backspace"),
            (KeyPress(Keys.ControlC, "\x03"), "ctrl+c"),
        ],
    )
    def test_named_keys(self, key_press: KeyPress, expected: str) -> None:
        """Test special keys map to their names."""
        assert to_key_events(key_press) == [KeyEvent(key=expected)]

    @pytest.mark.parametrize("char", ["a", "Q", "-", "j", " ", "7"])
    def test_printable_characters(self, char: str) -> None:
        """Test printable keys are passed through as-is."""
        assert to_key_events(KeyPress(char, char)) == [KeyEvent(key=char)]

    def test_bracketed_paste_expands(self) -> None:
        """Test pasted text becomes one event per printable character."""
        events = to_key_events(KeyPress(Keys.BracketedPaste, "ab\nc"))

        assert [e.key for e in events] == ["a", "b", "c"]

    @pytest.mark.parametrize("key", [Keys.F1, Keys.ControlA, Keys.Left])
    def test_unmapped_keys_ignored(self, key: Keys) -> None:
        """Test keys without a meaning produce no event."""
        assert to_key_events(KeyPress(key)) == []


class TestKeyEvent:
    """Test suite for KeyEvent."""

    @pytest.mark.parametrize("key", ["a", "Q", " ", "[", "7"])
    def test_single_characters_are_printable(self, key: str) -> None:
        """Test a single printable character is typed into text input."""
        assert KeyEvent(key=key).is_printable is True

    @pytest.mark.parametrize("key", ["enter", "tab", "ctrl+c", "pgdown", "\x1b"])
    def test_named_and_control_keys_are_not_printable(self, key: str) -> None:
        """Test key names and control characters are never typed."""
        assert KeyEvent(key=key).is_printable is False
