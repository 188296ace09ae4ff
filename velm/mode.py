"""Editor modes and the key grammars that drive them.

Each mode turns key presses into messages. ``Normal`` collects pending keys
until they form a command (``:``, ``i``, or an optionally counted ``hjkl``
motion). ``Insert`` maps keys one to one onto edits. ``Execute`` edits the
command line, which is interpreted by ``Execute.parse`` once it is finished.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

from .constants import EditorConstants
from .geometry import Position
from .keyboard import Key, KeyType
from .messages import (
    AbortCommandLineInput,
    DeleteCharBackward,
    DeleteCharForward,
    EndCommandLineInput,
    EnterMode,
    InsertChar,
    InsertLineBreak,
    Message,
    MoveCursorDown,
    MoveCursorLeft,
    MoveCursorLineEnd,
    MoveCursorLineStart,
    MoveCursorPageDown,
    MoveCursorPageUp,
    MoveCursorRight,
    MoveCursorUp,
    Quit,
    Save,
    SaveAs,
)
from .row import Row

logger = logging.getLogger(__name__)


class Mode(ABC):
    """The current interpretation of key input."""

    name: str = ""

    def __str__(self) -> str:
        return self.name

    @abstractmethod
    def handle(self, key: Key) -> Optional[Message]:
        """Translate a key press into a message, if it means anything."""


_MOTIONS = {
    'h': MoveCursorLeft,
    'j': MoveCursorDown,
    'k': MoveCursorUp,
    'l': MoveCursorRight,
}

_MOVEMENT = re.compile(r"(?P<count>[1-9][0-9]*)?(?P<motion>[hjkl])")
# Pending input that may still turn into a motion
_COUNT_PREFIX = re.compile(r"[1-9][0-9]*")


def command_for_input(text: str) -> Optional[Message]:
    """Match accumulated normal mode input against the command grammar."""
    if text == ':':
        return EnterMode(Execute())
    if text == 'i':
        return EnterMode(Insert())
    match = _MOVEMENT.fullmatch(text)
    if match:
        count = int(match.group('count') or 1)
        return _MOTIONS[match.group('motion')](count)
    return None


@dataclass
class Normal(Mode):
    input_buffer: str = ""

    name = "NORMAL"

    def handle(self, key: Key) -> Optional[Message]:
        if key.key_type == KeyType.CHAR:
            self.input_buffer += key.value
        elif key.key_type == KeyType.ESC:
            self.input_buffer = ""
            return None

        direct = _NORMAL_KEYS.get(key.key_type)
        if direct is not None:
            return direct()
        if key.key_type != KeyType.CHAR:
            return None

        message = command_for_input(self.input_buffer)
        if message is not None or not self._may_still_match():
            if message is None:
                logger.debug("Discarding unmatched input %r", self.input_buffer)
            self.input_buffer = ""
        return message

    def _may_still_match(self) -> bool:
        return (len(self.input_buffer) < EditorConstants.MAX_PENDING_KEYS
                and _COUNT_PREFIX.fullmatch(self.input_buffer) is not None)


@dataclass
class Insert(Mode):
    name = "INSERT"

    def handle(self, key: Key) -> Optional[Message]:
        if key.key_type == KeyType.CHAR:
            return InsertChar(key.value)
        if key.key_type == KeyType.TAB:
            return InsertChar('\t')
        factory = _INSERT_KEYS.get(key.key_type)
        return factory() if factory is not None else None


@dataclass
class Execute(Mode):
    """Command line mode.

    ``row`` and ``cursor_position`` seed the command line when the mode is
    entered, so a command can be prefilled.
    """
    row: Row = field(default_factory=Row)
    cursor_position: Position = field(default_factory=Position)

    name = "COMMAND"

    def handle(self, key: Key) -> Optional[Message]:
        if key.key_type == KeyType.CHAR:
            return InsertChar(key.value)
        factory = _EXECUTE_KEYS.get(key.key_type)
        return factory() if factory is not None else None

    @staticmethod
    def parse(command_string: str) -> Optional[Message]:
        """Interpret a finished command line.

        ``q`` quits, ``w`` saves and ``w <name>`` saves under a new name.
        Anything else yields None.
        """
        if command_string == 'q':
            return Quit()
        if command_string == 'w':
            return Save()
        match = _SAVE_AS.fullmatch(command_string)
        if match:
            return SaveAs(match.group('name'))
        return None


_SAVE_AS = re.compile(r"w (?P<name>.+)", re.DOTALL)

_NORMAL_KEYS: "dict[KeyType, Callable[[], Message]]" = {
    KeyType.HOME: MoveCursorLineStart,
    KeyType.END: MoveCursorLineEnd,
    KeyType.PAGE_UP: MoveCursorPageUp,
    KeyType.PAGE_DOWN: MoveCursorPageDown,
    KeyType.INSERT: lambda: EnterMode(Insert()),
    KeyType.ENTER: lambda: MoveCursorDown(1),
}

_INSERT_KEYS: "dict[KeyType, Callable[[], Message]]" = {
    KeyType.UP: MoveCursorUp,
    KeyType.DOWN: MoveCursorDown,
    KeyType.LEFT: MoveCursorLeft,
    KeyType.RIGHT: MoveCursorRight,
    KeyType.HOME: MoveCursorLineStart,
    KeyType.END: MoveCursorLineEnd,
    KeyType.PAGE_UP: MoveCursorPageUp,
    KeyType.PAGE_DOWN: MoveCursorPageDown,
    KeyType.DELETE: DeleteCharForward,
    KeyType.BACKSPACE: DeleteCharBackward,
    KeyType.ENTER: InsertLineBreak,
    KeyType.ESC: lambda: EnterMode(Normal()),
}

_EXECUTE_KEYS: "dict[KeyType, Callable[[], Message]]" = {
    KeyType.ENTER: EndCommandLineInput,
    KeyType.LEFT: MoveCursorLeft,
    KeyType.RIGHT: MoveCursorRight,
    KeyType.BACKSPACE: DeleteCharBackward,
    KeyType.DELETE: DeleteCharForward,
    KeyType.HOME: MoveCursorLineStart,
    KeyType.END: MoveCursorLineEnd,
    KeyType.ESC: AbortCommandLineInput,
}
