"""On-screen text keyboard: key layouts, geometry and touch handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class KeyAction(Enum):
    """What a key on the text keyboard does."""

    CHARACTER = auto()
    SPACE = auto()
    ENTER = auto()
    BACKSPACE = auto()
    SET_UPPERCASE = auto()
    SET_LOWERCASE = auto()
    SET_LETTERS = auto()
    SET_NUMBERS = auto()


@dataclass(frozen=True)
class KeyPress:
    """A key of the keyboard, as pressed or as laid out."""

    action: KeyAction
    char: str | None = None


_GAP = " "
_SPACE = "\t"
_ENTER = "\n"

_SPECIAL = {
    "\x80": KeyAction.BACKSPACE,
    "\x81": KeyAction.SET_UPPERCASE,
    "\x82": KeyAction.SET_LOWERCASE,
    "\x83": KeyAction.SET_LETTERS,
    "\x84": KeyAction.SET_NUMBERS,
}

_LOWERCASE = (
    "qwertyuiop",
    " asdfghjkl",
    "\x81zxcvbnm\x80",
    "\x84\t\n",
)

_UPPERCASE = (
    "QWERTYUIOP",
    " ASDFGHJKL",
    "\x82ZXCVBNM\x80",
    "\x84\t\n",
)

_NUMBERS = (
    "1234567890",
    "_-",
    " " * 17 + "\x80",
    "\x83\t\n",
)

_LAYOUT_SWITCH = {
    KeyAction.SET_UPPERCASE: _UPPERCASE,
    KeyAction.SET_LOWERCASE: _LOWERCASE,
    KeyAction.SET_LETTERS: _LOWERCASE,
    KeyAction.SET_NUMBERS: _NUMBERS,
}

GAP_WIDTH = 15
SPACE_WIDTH = 135
ENTER_WIDTH = 80
SPECIAL_WIDTH = 45
CHAR_WIDTH = 30

ROW_HEIGHT = 40
MARGIN = 15
TOUCH_TOP = 5
KEYBOARD_HEIGHT = 160


def _classify(code: str) -> KeyPress | None:
    if code == _GAP:
        return None
    if code == _SPACE:
        return KeyPress(KeyAction.SPACE, " ")
    if code == _ENTER:
        return KeyPress(KeyAction.ENTER)
    if code in _SPECIAL:
        return KeyPress(_SPECIAL[code])
    return KeyPress(KeyAction.CHARACTER, code)


def _width(key: KeyPress | None) -> int:
    if key is None:
        return GAP_WIDTH
    if key.action is KeyAction.SPACE:
        return SPACE_WIDTH
    if key.action is KeyAction.ENTER:
        return ENTER_WIDTH
    if key.action is KeyAction.CHARACTER:
        return CHAR_WIDTH
    return SPECIAL_WIDTH


class TextKeyboard:
    """A four-row text keyboard that switches between letter and number layouts."""

    height = KEYBOARD_HEIGHT

    def __init__(self) -> None:
        self._rows: tuple[str, ...] = _LOWERCASE

    @property
    def rows(self) -> tuple[str, ...]:
        """The rows of the current layout, as layout strings."""
        return self._rows

    def keys(self) -> Iterator[tuple[int, int, int, KeyPress]]:
        """Yield ``(x, y, width, key)`` for each key of the current layout."""
        for index, row in enumerate(self._rows):
            y = MARGIN + index * ROW_HEIGHT
            x = MARGIN
            for code in row:
                key = _classify(code)
                width = _width(key)
                if key is not None:
                    yield x, y, width, key
                x += width

    def touch(self, x: int, y: int) -> KeyPress | None:
        """Handle a touch at ``(x, y)`` and return the key hit, if any.

        Layout keys switch the current layout before being returned.
        """
        row = max(0, y - TOUCH_TOP) // ROW_HEIGHT
        if row >= len(self._rows):
            return None
        for code in self._rows[row]:
            key = _classify(code)
            width = _width(key)
            if key is not None and x <= width:
                new_layout = _LAYOUT_SWITCH.get(key.action)
                if new_layout is not None:
                    self._rows = new_layout
                return key
            x -= width
        return None