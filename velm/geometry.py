"""Geometry and color primitives shared by all rendering."""

from dataclasses import dataclass, field
from enum import Enum


class Color(Enum):
    """Named terminal colors supported by the editor."""
    RESET = "reset"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    LIGHT_RED = "light_red"
    LIGHT_GREEN = "light_green"
    LIGHT_YELLOW = "light_yellow"
    LIGHT_BLUE = "light_blue"
    LIGHT_MAGENTA = "light_magenta"
    LIGHT_CYAN = "light_cyan"
    WHITE = "white"


@dataclass(frozen=True)
class Rgb:
    """A true-color value."""
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class AnsiValue:
    """An entry of the 256-color palette."""
    value: int


@dataclass(frozen=True)
class Position:
    """A zero-based position in screen or document space."""
    col: int = 0
    row: int = 0


@dataclass(frozen=True)
class Rect:
    """An area of the screen: a size plus the position of its top-left cell."""
    width: int = 0
    height: int = 0
    position: Position = field(default_factory=Position)

    @classmethod
    def positioned(cls, width: int, height: int, col: int, row: int) -> "Rect":
        return cls(width, height, Position(col, row))

    def area(self) -> int:
        return self.width * self.height

    def left(self) -> int:
        return self.position.col

    def right(self) -> int:
        """Last column inside the rect (inclusive)."""
        return self.position.col + self.width - 1

    def top(self) -> int:
        return self.position.row

    def bottom(self) -> int:
        """Last row inside the rect (inclusive)."""
        return self.position.row + self.height - 1

    def contains(self, position: Position) -> bool:
        return (
            self.left() <= position.col <= self.right()
            and self.top() <= position.row <= self.bottom()
        )
