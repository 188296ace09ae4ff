"""Single line text input, used for the command line."""

from __future__ import annotations

from typing import Optional

import grapheme

from .commands import Command, EmitMessage, ParseCommandLine
from .component import Component
from .geometry import Position
from .messages import (
    AbortCommandLineInput,
    DeleteCharBackward,
    DeleteCharForward,
    EndCommandLineInput,
    EnterMode,
    InsertChar,
    Message,
    MoveCursorLeft,
    MoveCursorLineEnd,
    MoveCursorLineStart,
    MoveCursorRight,
)
from .mode import Normal
from .render import Frame, View
from .row import Row


class TextInput(Component, View):
    """A prompt followed by an editable value.

    When unfocused and empty the placeholder is shown instead. While focused
    it places the frame cursor at its own cursor.
    """

    def __init__(self, prompt: str, placeholder: str, position: Position):
        self.prompt = prompt
        self.placeholder = placeholder
        self.position = position
        self.value = Row()
        self.cursor_position = 0
        self.focused = False

    def focus(self, value: Optional[Row] = None, cursor_position: int = 0) -> None:
        self.focused = True
        if value is not None:
            self.value = Row(value.contents())
            self.cursor_position = min(cursor_position, len(self.value))

    def unfocus(self) -> None:
        self.focused = False

    def reset(self) -> None:
        self.value = Row()
        self.cursor_position = 0

    def _abort(self) -> Command:
        self.reset()
        return EmitMessage(EnterMode(Normal()))

    def update(self, message: Message) -> Optional[Command]:
        if isinstance(message, InsertChar):
            self.value.insert(self.cursor_position, message.char)
            self.cursor_position += 1
        elif isinstance(message, EndCommandLineInput):
            text = self.value.contents()
            self.reset()
            return ParseCommandLine(text)
        elif isinstance(message, AbortCommandLineInput):
            return self._abort()
        elif isinstance(message, MoveCursorLeft):
            self.cursor_position = max(self.cursor_position - message.count, 0)
        elif isinstance(message, MoveCursorRight):
            self.cursor_position = min(self.cursor_position + message.count, len(self.value))
        elif isinstance(message, MoveCursorLineStart):
            self.cursor_position = 0
        elif isinstance(message, MoveCursorLineEnd):
            self.cursor_position = len(self.value)
        elif isinstance(message, DeleteCharForward):
            self.value.delete(self.cursor_position)
        elif isinstance(message, DeleteCharBackward):
            # Backspace on an empty line leaves the command line
            if self.value.is_empty():
                return self._abort()
            if self.cursor_position > 0:
                self.cursor_position -= 1
                self.value.delete(self.cursor_position)
        return None

    def render_to(self, frame: Frame) -> None:
        if self.value.is_empty() and self.placeholder and not self.focused:
            frame.write_line(self.position.row, self.placeholder)
            return

        frame.write_line(self.position.row, self.prompt + self.value.contents())
        if self.focused:
            frame.set_cursor_position(Position(
                self.position.col + grapheme.length(self.prompt) + self.cursor_position,
                self.position.row,
            ))
