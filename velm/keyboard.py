"""Keyboard input: keys, input events and curtsies token parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Kinds of key presses accepted by the editor."""
    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    ESC = "esc"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    INSERT = "insert"
    DELETE = "delete"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    CHAR = "char"  # A printable character
    CTRL = "ctrl"  # Ctrl + a character
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Key:
    """A key press. ``value`` holds the character for CHAR and CTRL keys."""
    key_type: KeyType
    value: str = ""

    @classmethod
    def char(cls, ch: str) -> Key:
        return cls(KeyType.CHAR, ch)

    @classmethod
    def ctrl(cls, ch: str) -> Key:
        return cls(KeyType.CTRL, ch)

    @property
    def is_char(self) -> bool:
        return self.key_type == KeyType.CHAR


class Event:
    """Base class of events coming from the input backend."""


@dataclass(frozen=True)
class KeyPressed(Event):
    key: Key


@dataclass(frozen=True)
class MouseInputReceived(Event):
    pass


@dataclass(frozen=True)
class WindowResized(Event):
    width: int
    height: int


@dataclass(frozen=True)
class ReadFailed(Event):
    error: Exception


# curtsies-style token names for keys without a printable form
_SPECIALS = {
    'enter': KeyType.ENTER,
    'return': KeyType.ENTER,
    'tab': KeyType.TAB,
    'backspace': KeyType.BACKSPACE,
    'esc': KeyType.ESC,
    'escape': KeyType.ESC,
    'left': KeyType.LEFT,
    'right': KeyType.RIGHT,
    'up': KeyType.UP,
    'down': KeyType.DOWN,
    'insert': KeyType.INSERT,
    'delete': KeyType.DELETE,
    'home': KeyType.HOME,
    'end': KeyType.END,
    'page_up': KeyType.PAGE_UP,
    'page_down': KeyType.PAGE_DOWN,
}


def parse_key(key_str: str) -> Key:
    """Parse a curtsies key token (e.g. ``'a'``, ``'<UP>'``, ``'<Ctrl-x>'``)."""
    # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+u>'
    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        name = key_str[1:-1]
        lower = name.lower().replace('+', '-')
        parts = lower.split('-') if '-' in lower else [lower]
        mods = set(parts[:-1])
        base = parts[-1]
        # Ctrl-letter keeps the original case of the base
        base_raw = name.replace('+', '-').split('-')[-1]
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return Key.char(' ')
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-J / Ctrl-M are what terminals send for Enter
            if base in ('j', 'm'):
                return Key(KeyType.ENTER)
            return Key.ctrl(base_raw.lower())
        if mods:
            # Alt/shift combinations have no meaning in the editor
            return Key(KeyType.UNKNOWN)
        if base in _SPECIALS:
            return Key(_SPECIALS[base])
        return Key(KeyType.UNKNOWN)

    if len(key_str) == 1:
        o = ord(key_str)
        if key_str == '\t':
            return Key(KeyType.TAB)
        if key_str in ('\n', '\r'):
            return Key(KeyType.ENTER)
        if key_str == '\x1b':
            return Key(KeyType.ESC)
        if key_str in ('\x7f', '\x08'):
            return Key(KeyType.BACKSPACE)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return Key.ctrl(chr(ord('a') + o - 1))
        if o < 32:
            return Key(KeyType.UNKNOWN)
        return Key.char(key_str)

    # Multi-code-point clusters arrive whole from some terminals
    if key_str and key_str.isprintable():
        return Key.char(key_str)
    return Key(KeyType.UNKNOWN)


def key_name(key: Key) -> str:
    """Human readable name of a key, as shown by ``velm --keytest``."""
    if key.key_type == KeyType.CHAR:
        return f"char={key.value!r}"
    if key.key_type == KeyType.CTRL:
        return f"ctrl={key.value!r}"
    return key.key_type.value
