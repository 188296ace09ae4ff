"""Double-buffered frame rendering.

All drawing in the editor goes into a ``Frame``. Two frames are kept by the
``Viewport``: the one being drawn and the one shown last cycle. Diffing them
yields the cells that actually changed, so each render only sends those to
the drawing surface no matter how large the terminal is.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Union

import grapheme

from .errors import CanvasError, OutOfBoundsError
from .geometry import AnsiValue, Color, Position, Rect, Rgb

logger = logging.getLogger(__name__)

ColorValue = Union[Color, Rgb, AnsiValue]

BLANK = " "


class Canvas(ABC):
    """Interface to the drawing surface (a terminal, or a fake in tests).

    Every method may raise ``OSError``.
    """

    @abstractmethod
    def clear(self) -> None:
        """Clear the whole surface."""

    @abstractmethod
    def draw(self, cells: Iterable["Cell"]) -> None:
        """Draw the given cells, in order."""

    @abstractmethod
    def flush(self) -> None:
        """Push everything queued so far to the surface."""

    @abstractmethod
    def hide_cursor(self) -> None: ...

    @abstractmethod
    def show_cursor(self) -> None: ...

    @abstractmethod
    def position_cursor(self, row: int, col: int) -> None: ...

    @abstractmethod
    def size(self) -> Rect:
        """Current size of the surface."""


@dataclass
class Cell:
    """One screen unit: a grapheme plus its colors."""
    position: Position
    symbol: str = BLANK
    foreground: ColorValue = Color.RESET
    background: ColorValue = Color.RESET

    def reset(self) -> None:
        self.symbol = BLANK
        self.foreground = Color.RESET
        self.background = Color.RESET


@dataclass
class Frame:
    """A grid of cells covering ``area``, stored row-major."""
    area: Rect
    cells: list[Cell] = field(default_factory=list)
    cursor_position: Position = field(default_factory=Position)

    @classmethod
    def empty(cls, area: Rect) -> Frame:
        return cls.filled(area, BLANK)

    @classmethod
    def filled(cls, area: Rect, symbol: str) -> Frame:
        cells = [
            Cell(Position(area.left() + col, area.top() + row), symbol)
            for row in range(area.height)
            for col in range(area.width)
        ]
        return cls(area, cells)

    def index_of(self, position: Position) -> int:
        if not self.area.contains(position):
            raise OutOfBoundsError(f"position {position} is outside of {self.area}")
        return ((position.row - self.area.top()) * self.area.width
                + (position.col - self.area.left()))

    def cell(self, col: int, row: int) -> Cell:
        return self.cells[self.index_of(Position(col, row))]

    def reset(self) -> None:
        """Blank every cell and the pending cursor position."""
        for cell in self.cells:
            cell.reset()
        self.cursor_position = Position()

    def set_cursor_position(self, position: Position) -> None:
        self.cursor_position = position

    def write_line(self, row: int, text: str, foreground: ColorValue = Color.RESET,
                   background: ColorValue = Color.RESET) -> None:
        """Replace a whole line of the frame.

        One cell is written per grapheme (tabs as a single space), text past
        the right edge is dropped and the remainder of the line is blanked.
        """
        start = self.index_of(Position(self.area.left(), row))
        width = self.area.width
        written = 0
        for g in grapheme.graphemes(text):
            if written == width:
                break
            cell = self.cells[start + written]
            cell.symbol = BLANK if g == "\t" else g
            cell.foreground = foreground
            cell.background = background
            written += 1
        for i in range(start + written, start + width):
            self.cells[i].reset()

    def line(self, row: int) -> str:
        """The symbols of one line, joined (used for inspection and tests)."""
        start = self.index_of(Position(self.area.left(), row))
        return "".join(c.symbol for c in self.cells[start:start + self.area.width])


def diff(previous: Frame, current: Frame) -> list[Cell]:
    """Cells of ``current`` that differ from ``previous``, in row-major order."""
    if previous.area != current.area:
        raise ValueError(f"cannot diff frames of {previous.area} and {current.area}")
    return [cur for prev, cur in zip(previous.cells, current.cells) if prev != cur]


class View(ABC):
    """Anything that can draw itself into a frame."""

    @abstractmethod
    def render_to(self, frame: Frame) -> None: ...


class Viewport:
    """Owns the two frames and the drawing surface.

    Use as a context manager, or call ``close()``, so the surface is cleared
    when the editor ends.
    """

    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        try:
            self.area = canvas.size()
        except OSError as e:
            raise CanvasError("unable to set Viewport area") from e
        self._frames = [Frame.empty(self.area), Frame.empty(self.area)]
        self._current = 0
        self._closed = False
        # The blank frames assume a blank screen
        self._step(canvas.clear, "unable to clear canvas")

    def __enter__(self) -> Viewport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def current_frame(self) -> Frame:
        return self._frames[self._current]

    @property
    def previous_frame(self) -> Frame:
        return self._frames[1 - self._current]

    def _step(self, action, context: str, *args) -> None:
        try:
            action(*args)
        except OSError as e:
            raise CanvasError(context) from e

    def render(self, view: View) -> None:
        """Draw ``view`` and send only the changed cells to the canvas."""
        self._step(self.canvas.hide_cursor, "unable to hide cursor pre draw")

        frame = self.current_frame
        view.render_to(frame)
        cursor = frame.cursor_position
        changes = diff(self.previous_frame, frame)

        self._step(self.canvas.draw, "unable to draw buffer diff", changes)
        self._step(self.canvas.position_cursor,
                   "unable to set cursor position for next frame render",
                   cursor.row, cursor.col)
        self._step(self.canvas.show_cursor, "unable to show cursor post draw")
        self._swap_buffers()
        self._step(self.canvas.flush, "unable to flush canvas")

    def _swap_buffers(self) -> None:
        self.previous_frame.reset()
        self._current = 1 - self._current

    def resize(self, area: Rect) -> None:
        """Recreate both frames for a new surface size."""
        logger.debug("Resizing viewport to %dx%d", area.width, area.height)
        self.area = area
        self._frames = [Frame.empty(area), Frame.empty(area)]
        self._current = 0
        self._step(self.canvas.clear, "unable to clear canvas")

    def close(self) -> None:
        """Leave the user with a clean surface."""
        if self._closed:
            return
        self._closed = True
        self._step(self.canvas.clear, "unable to clear canvas")
        self._step(self.canvas.flush, "unable to flush canvas")
