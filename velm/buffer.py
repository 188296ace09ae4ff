"""The editing buffer: a document, a cursor and a scrolled view onto them."""

from __future__ import annotations

from typing import Optional

from .commands import Command, EmitMessage
from .component import Component
from .constants import EditorConstants
from .document import Document
from .errors import OutOfRangeError
from .geometry import Position, Rect
from .messages import (
    CURSOR_MOVES,
    DeleteCharBackward,
    DeleteCharForward,
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
    Save,
    SaveAs,
    ShowStatusMessage,
)
from .render import Frame, View


class Buffer(Component, View):
    """Edits one document.

    The cursor lives in document space: ``col`` is a grapheme index and
    ``row`` may be one past the last row, where typing appends a new row.
    ``offset`` is the document position shown in the top-left corner.
    """

    def __init__(self, viewport: Rect, document: Optional[Document] = None):
        self.viewport = viewport
        self.document = document or Document()
        self.cursor_position = Position()
        self.offset = Position()
        self.focused = False

    @property
    def text_height(self) -> int:
        """Rows available for text above the status bar and command line."""
        return max(self.viewport.height - EditorConstants.RESERVED_ROWS, 1)

    def document_name(self) -> str:
        return self.document.file_name or EditorConstants.NO_NAME

    def lines_in_document(self) -> int:
        return len(self.document)

    def screen_cursor_position(self) -> Position:
        """The cursor relative to the top-left of the visible text."""
        return Position(
            self.viewport.left() + self.cursor_position.col - self.offset.col,
            self.viewport.top() + self.cursor_position.row - self.offset.row,
        )

    def resize(self, viewport: Rect) -> None:
        self.viewport = viewport
        self.scroll()

    def scroll(self) -> None:
        """Recompute the offset so the cursor is visible."""
        col, row = self.cursor_position.col, self.cursor_position.row
        offset_col, offset_row = self.offset.col, self.offset.row
        height = self.text_height
        width = max(self.viewport.width, 1)

        if row < offset_row:
            offset_row = row
        elif row >= offset_row + height:
            offset_row = row - height + 1

        if col < offset_col:
            offset_col = col
        elif col >= offset_col + width:
            offset_col = col - width + 1

        self.offset = Position(offset_col, offset_row)

    def _row_width(self, row: int) -> int:
        r = self.document.row(row)
        return len(r) if r is not None else 0

    def move_cursor(self, message: Message) -> None:
        col, row = self.cursor_position.col, self.cursor_position.row
        height = len(self.document)
        width = self._row_width(row)
        page = self.text_height

        if isinstance(message, MoveCursorUp):
            row = max(row - message.count, 0)
        elif isinstance(message, MoveCursorDown):
            row = min(row + message.count, height)
        elif isinstance(message, MoveCursorLeft):
            if col > 0:
                col = max(col - message.count, 0)
            elif row > 0:
                # Wrap to the end of the previous row
                row -= 1
                col = self._row_width(row)
        elif isinstance(message, MoveCursorRight):
            if col < width:
                col = min(col + message.count, width)
            elif row < height:
                row, col = row + 1, 0
        elif isinstance(message, MoveCursorPageUp):
            row = max(row - page, 0)
        elif isinstance(message, MoveCursorPageDown):
            row = min(row + page, height)
        elif isinstance(message, MoveCursorLineStart):
            col = 0
        elif isinstance(message, MoveCursorLineEnd):
            col = width

        self.cursor_position = Position(min(col, self._row_width(row)), row)

    def update(self, message: Message) -> Optional[Command]:
        command = None
        if isinstance(message, InsertChar):
            try:
                self.document.insert(self.cursor_position, message.char)
            except OutOfRangeError as e:
                raise OutOfRangeError("unable to insert character in document") from e
            self.move_cursor(MoveCursorRight(1))
        elif isinstance(message, InsertLineBreak):
            self.document.insert_newline(self.cursor_position)
            self.move_cursor(MoveCursorDown(1))
            self.move_cursor(MoveCursorLineStart())
        elif isinstance(message, DeleteCharForward):
            self.document.delete(self.cursor_position)
        elif isinstance(message, DeleteCharBackward):
            if self.cursor_position.col > 0 or self.cursor_position.row > 0:
                self.move_cursor(MoveCursorLeft(1))
                self.document.delete(self.cursor_position)
        elif isinstance(message, (Save, SaveAs)):
            command = self._save(message.file_name if isinstance(message, SaveAs) else None)
        elif isinstance(message, CURSOR_MOVES):
            self.move_cursor(message)

        self.scroll()
        return command

    def _save(self, file_name: Optional[str]) -> Command:
        if not self.document.save(file_name):
            return EmitMessage(ShowStatusMessage(EditorConstants.NO_FILE_NAME_MESSAGE))
        return EmitMessage(ShowStatusMessage(
            EditorConstants.SAVED_MESSAGE.format(self.document.file_name, len(self.document))
        ))

    def render_to(self, frame: Frame) -> None:
        if self.focused:
            frame.set_cursor_position(self.screen_cursor_position())

        start = self.offset.col
        end = self.offset.col + self.viewport.width
        for row_in_view in range(min(self.text_height, self.viewport.height)):
            screen_row = self.viewport.top() + row_in_view
            row = self.document.row(self.offset.row + row_in_view)
            if row is not None:
                frame.write_line(screen_row, row.to_string(start, end))
            else:
                frame.write_line(screen_row, EditorConstants.EMPTY_ROW_MARKER,
                                 EditorConstants.EMPTY_ROW_FOREGROUND)
