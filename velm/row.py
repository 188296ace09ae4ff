"""A single line of text, addressed by grapheme cluster."""

from __future__ import annotations

import grapheme


class Row:
    """A row of text within a document.

    Every index is a grapheme-cluster index rather than a code point index,
    so an emoji or a letter with combining marks counts as one column.
    """

    __slots__ = ("_string",)

    def __init__(self, string: str = ""):
        self._string = string

    def __len__(self) -> int:
        return grapheme.length(self._string)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._string == other._string

    def __repr__(self) -> str:
        return f"Row({self._string!r})"

    def is_empty(self) -> bool:
        return not self._string

    def contents(self) -> str:
        """The full text of the row."""
        return self._string

    def graphemes(self) -> list[str]:
        return list(grapheme.graphemes(self._string))

    def to_string(self, start: int, end: int) -> str:
        """Return graphemes ``[start, end)`` for display.

        Both bounds are clamped to the row and tabs are rendered as a single
        space.
        """
        end = min(end, len(self))
        start = min(start, end)
        return "".join(
            " " if g == "\t" else g
            for g in grapheme.graphemes(grapheme.slice(self._string, start, end))
        )

    def append(self, other: Row) -> None:
        self._string += other._string

    def delete(self, at: int) -> None:
        """Delete the grapheme at ``at``; no-op past the end of the row."""
        if at >= len(self):
            return
        self._string = (
            grapheme.slice(self._string, 0, at) + grapheme.slice(self._string, at + 1)
        )

    def insert(self, at: int, ch: str) -> None:
        """Insert ``ch`` before grapheme ``at``; appends when past the end."""
        if at >= len(self):
            self._string += ch
            return
        self._string = (
            grapheme.slice(self._string, 0, at) + ch + grapheme.slice(self._string, at)
        )

    def split(self, at: int) -> Row:
        """Keep the first ``at`` graphemes and return the rest as a new row."""
        remainder = grapheme.slice(self._string, at)
        self._string = grapheme.slice(self._string, 0, at)
        return Row(remainder)

    def encode(self) -> bytes:
        return self._string.encode("utf-8")
