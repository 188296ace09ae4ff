"""The document model: an ordered, never empty list of rows."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Optional

from .constants import EditorConstants
from .errors import DocumentIOError, OutOfRangeError
from .geometry import Position
from .row import Row

logger = logging.getLogger(__name__)


class Document:
    """Rows of text plus the name of the file they belong to.

    A document always holds at least one row. Positions passed to the
    editing operations use ``col`` as a grapheme index within ``row``.
    """

    def __init__(self, rows: Optional[list[Row]] = None, file_name: Optional[str] = None):
        self.rows: list[Row] = rows or [Row()]
        self.file_name = file_name

    @classmethod
    def open(cls, file_name: str) -> Document:
        """Load a document from disk.

        Raises:
            DocumentIOError: If the file cannot be read.
        """
        try:
            with open(file_name, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentIOError(f"unable to read from file {file_name}") from e

        lines = content.split("\n")
        # A trailing newline terminates the last row rather than starting a new one
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        rows = [Row(line[:-1] if line.endswith("\r") else line) for line in lines]
        logger.info("Opened %s (%d rows)", file_name, len(rows))
        return cls(rows, file_name=file_name)

    def save(self, file_name: Optional[str] = None) -> bool:
        """Write every row followed by a newline, atomically.

        If ``file_name`` is given it becomes the document's name. Returns
        False without writing anything when the document has no name.

        Raises:
            DocumentIOError: If the file cannot be written.
        """
        if file_name is not None:
            self.file_name = file_name
        if self.file_name is None:
            return False

        target = self.file_name
        dir_name = os.path.dirname(target) or "."
        temp_filename = None
        try:
            # Same directory keeps the rename on one filesystem
            with tempfile.NamedTemporaryFile(mode="wb", dir=dir_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                for row in self.rows:
                    temp_file.write(row.encode())
                    temp_file.write(b"\n")
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, target)
        except OSError as e:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_filename)
            raise DocumentIOError(f"unable to save document to {target}") from e

        logger.info("Saved %s (%d rows)", target, len(self.rows))
        return True

    def __len__(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def insert(self, at: Position, ch: str) -> None:
        """Insert a character.

        At ``row == len(self)`` a new row holding just ``ch`` is appended.

        Raises:
            OutOfRangeError: If ``at.row`` is past the end of the document.
        """
        if at.row == len(self.rows):
            self.rows.append(Row(ch))
        elif at.row < len(self.rows):
            self.rows[at.row].insert(at.col, ch)
        else:
            raise OutOfRangeError(
                f"trying to insert character at row {at.row} past document length {len(self.rows)}"
            )

    def delete(self, at: Position) -> None:
        """Delete the grapheme at ``at``.

        Deleting at the end of a row joins the following row onto it.
        """
        if at.row >= len(self.rows):
            return
        row = self.rows[at.row]
        if at.col == len(row) and at.row < len(self.rows) - 1:
            row.append(self.rows.pop(at.row + 1))
            return
        row.delete(at.col)

    def insert_newline(self, at: Position) -> None:
        """Split the row at ``at``, moving its tail onto a new following row."""
        if at.row > len(self.rows):
            return
        if at.row == len(self.rows):
            self.rows.append(Row())
            return
        tail = self.rows[at.row].split(at.col)
        self.rows.insert(at.row + 1, tail)
