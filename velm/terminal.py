"""Terminal backend using Blessed for display and Curtsies for input."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import AsyncIterator, Iterable, Optional

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

from .constants import EditorConstants
from .geometry import AnsiValue, Color, Rect, Rgb
from .keyboard import Event, KeyPressed, ReadFailed, WindowResized, parse_key
from .render import Canvas, Cell, ColorValue

logger = logging.getLogger(__name__)

# Blessed attribute names for the named colors
_COLOR_NAMES = {
    Color.BLACK: "black",
    Color.RED: "red",
    Color.GREEN: "green",
    Color.YELLOW: "yellow",
    Color.BLUE: "blue",
    Color.MAGENTA: "magenta",
    Color.CYAN: "cyan",
    Color.GRAY: "white",
    Color.DARK_GRAY: "bright_black",
    Color.LIGHT_RED: "bright_red",
    Color.LIGHT_GREEN: "bright_green",
    Color.LIGHT_YELLOW: "bright_yellow",
    Color.LIGHT_BLUE: "bright_blue",
    Color.LIGHT_MAGENTA: "bright_magenta",
    Color.LIGHT_CYAN: "bright_cyan",
    Color.WHITE: "bright_white",
}


class BlessedCanvas(Canvas):
    """Full-screen terminal canvas.

    Used as a context manager: entering switches to the alternate screen and
    puts the keyboard in raw mode; leaving restores both.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[Input] = None
        self._pending: list[str] = []

    def __enter__(self) -> BlessedCanvas:
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def setup(self) -> None:
        """Enter fullscreen mode and raw keyboard input."""
        print(self.term.enter_fullscreen, end="", flush=True)
        self.is_fullscreen = True
        self._input = Input(keynames="curtsies")
        self._input.__enter__()

    def cleanup(self) -> None:
        """Exit fullscreen mode and restore the terminal."""
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.normal_cursor + self.term.exit_fullscreen,
                  end="", flush=True)
            self.is_fullscreen = False

    # Output

    def _color(self, value: ColorValue, background: bool) -> str:
        if isinstance(value, Rgb):
            if background:
                return self.term.on_color_rgb(value.r, value.g, value.b)
            return self.term.color_rgb(value.r, value.g, value.b)
        if isinstance(value, AnsiValue):
            if background:
                return self.term.on_color(value.value)
            return self.term.color(value.value)
        if value == Color.RESET:
            return ""
        name = _COLOR_NAMES[value]
        return getattr(self.term, "on_" + name if background else name)

    def clear(self) -> None:
        self._pending.append(self.term.home + self.term.normal + self.term.clear)

    def draw(self, cells: Iterable[Cell]) -> None:
        out = []
        last = None
        for cell in cells:
            position = cell.position
            # Consecutive cells on a row need no cursor movement
            if last is None or (position.row, position.col) != (last.row, last.col + 1):
                out.append(self.term.move_yx(position.row, position.col))
            out.append(self.term.normal)
            out.append(self._color(cell.foreground, background=False))
            out.append(self._color(cell.background, background=True))
            out.append(cell.symbol)
            last = position
        if out:
            out.append(self.term.normal)
        self._pending.append("".join(out))

    def flush(self) -> None:
        data = "".join(self._pending)
        self._pending.clear()
        print(data, end="", flush=True)

    def hide_cursor(self) -> None:
        self._pending.append(self.term.hide_cursor)

    def show_cursor(self) -> None:
        self._pending.append(self.term.normal_cursor)

    def position_cursor(self, row: int, col: int) -> None:
        self._pending.append(self.term.move_yx(row, col))

    def size(self) -> Rect:
        return Rect(self.term.width, self.term.height)

    # Input

    def read_events(self, timeout: Optional[float] = None) -> list[Event]:
        """Wait up to ``timeout`` seconds (forever if None) for keyboard input."""
        if self._input is None:
            raise OSError("terminal input is not open")
        return self._translate(self._input.send(timeout))

    def _translate(self, raw) -> list[Event]:
        if raw is None:
            return []
        if isinstance(raw, PasteEvent):
            return [KeyPressed(parse_key(str(e))) for e in raw.events]
        if isinstance(raw, str):
            return [KeyPressed(parse_key(raw))]
        logger.debug("Ignoring input event %r", raw)
        return []

    async def events(self) -> AsyncIterator[Event]:
        """Yield input events until the generator is closed.

        Keyboard reads block for at most ``INPUT_POLL_TIMEOUT`` seconds in a
        worker thread. Terminal resizes arrive through SIGWINCH. A failed
        read is reported once as ``ReadFailed`` and ends the stream.
        """
        loop = asyncio.get_running_loop()
        resizes: list[Event] = []

        def on_resize() -> None:
            resizes.append(WindowResized(self.term.width, self.term.height))

        loop.add_signal_handler(signal.SIGWINCH, on_resize)
        try:
            while True:
                while resizes:
                    yield resizes.pop(0)
                try:
                    received = await loop.run_in_executor(
                        None, self.read_events, EditorConstants.INPUT_POLL_TIMEOUT
                    )
                except OSError as e:
                    logger.error(f"Reading terminal input failed: {e}")
                    yield ReadFailed(e)
                    return
                for event in received:
                    yield event
        finally:
            loop.remove_signal_handler(signal.SIGWINCH)
