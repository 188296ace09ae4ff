"""Messages: the only way state changes travel through the editor.

Every message is an immutable dataclass. Components receive them through
``Component.update``; nothing else mutates component state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .mode import Mode


class Message:
    """Base class of all messages."""


@dataclass(frozen=True)
class EnterMode(Message):
    mode: "Mode"


@dataclass(frozen=True)
class InsertChar(Message):
    char: str


@dataclass(frozen=True)
class InsertLineBreak(Message):
    pass


@dataclass(frozen=True)
class DeleteCharForward(Message):
    pass


@dataclass(frozen=True)
class DeleteCharBackward(Message):
    pass


@dataclass(frozen=True)
class MoveCursorUp(Message):
    count: int = 1


@dataclass(frozen=True)
class MoveCursorDown(Message):
    count: int = 1


@dataclass(frozen=True)
class MoveCursorLeft(Message):
    count: int = 1


@dataclass(frozen=True)
class MoveCursorRight(Message):
    count: int = 1


@dataclass(frozen=True)
class MoveCursorLineStart(Message):
    pass


@dataclass(frozen=True)
class MoveCursorLineEnd(Message):
    pass


@dataclass(frozen=True)
class MoveCursorPageUp(Message):
    pass


@dataclass(frozen=True)
class MoveCursorPageDown(Message):
    pass


@dataclass(frozen=True)
class Save(Message):
    pass


@dataclass(frozen=True)
class SaveAs(Message):
    file_name: str


@dataclass(frozen=True)
class EndCommandLineInput(Message):
    pass


@dataclass(frozen=True)
class AbortCommandLineInput(Message):
    pass


@dataclass(frozen=True)
class Quit(Message):
    pass


@dataclass(frozen=True)
class Resize(Message):
    width: int
    height: int


@dataclass(frozen=True)
class ShowStatusMessage(Message):
    text: str


@dataclass(frozen=True)
class ClearStatusMessage(Message):
    """Clear the status message, but only if it is still ``text``."""
    text: str


CURSOR_MOVES = (
    MoveCursorUp,
    MoveCursorDown,
    MoveCursorLeft,
    MoveCursorRight,
    MoveCursorLineStart,
    MoveCursorLineEnd,
    MoveCursorPageUp,
    MoveCursorPageDown,
)
