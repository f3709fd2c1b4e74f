"""Key normalization.

Translates prompt_toolkit key presses into :class:`KeyEvent` names used by
the navigation state machine.
"""

from typing import Final

from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from cloudgate.models.messages import KeyEvent

_NAMED_KEYS: Final[dict[str, str]] = {
    Keys.Up.value: "up",
    Keys.Down.value: "down",
    Keys.PageUp.value: "pgup",
    Keys.PageDown.value: "pgdown",
    Keys.Home.value: "home",
    Keys.End.value: "end",
    Keys.Escape.value: "esc",
    Keys.ControlC.value: "ctrl+c",
    Keys.ControlM.value: "enter",
    Keys.ControlJ.value: "enter",
    Keys.ControlI.value: "tab",
    Keys.ControlH.value: "backspace",
}


def to_key_events(key_press: KeyPress) -> list[KeyEvent]:
    """Normalize one prompt_toolkit key press.

    Pasted text expands to one event per printable character so that it can
    be typed into the free-text buffer. Unmapped keys produce no event.

    Args:
        key_press: Key press read from the terminal.

    Returns:
        Zero or more normalized key events.

    Example:
        >>> to_key_events(KeyPress(Keys.ControlM, "\\r"))
        [KeyEvent(key='enter')]
    """
    key = key_press.key
    name = key.value if isinstance(key, Keys) else key

    if name == Keys.BracketedPaste.value:
        return [KeyEvent(key=char) for char in key_press.data if char.isprintable()]

    if name in _NAMED_KEYS:
        return [KeyEvent(key=_NAMED_KEYS[name])]

    if len(name) == 1 and name.isprintable():
        return [KeyEvent(key=name)]

    return []
