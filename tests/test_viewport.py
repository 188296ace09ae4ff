"""Tests for the double-buffered viewport."""

import pytest

from velm.errors import CanvasError
from velm.geometry import Position, Rect
from velm.render import Canvas, Frame, View, Viewport


class MockCanvas(Canvas):
    """Records every call made by the viewport."""

    def __init__(self, width=10, height=4, fail_on=None):
        self.area = Rect(width, height)
        self.fail_on = fail_on
        self.calls = []
        self.drawn = []

    def _record(self, name, *args):
        if name == self.fail_on:
            raise OSError(f"{name} failed")
        self.calls.append((name, *args))

    def clear(self):
        self._record("clear")

    def draw(self, cells):
        cells = list(cells)
        self._record("draw", len(cells))
        self.drawn.append([(c.position, c.symbol) for c in cells])

    def flush(self):
        self._record("flush")

    def hide_cursor(self):
        self._record("hide_cursor")

    def show_cursor(self):
        self._record("show_cursor")

    def position_cursor(self, row, col):
        self._record("position_cursor", row, col)

    def size(self):
        if self.fail_on == "size":
            raise OSError("size failed")
        return self.area


class TextView(View):
    def __init__(self, lines, cursor=Position()):
        self.lines = lines
        self.cursor = cursor

    def render_to(self, frame: Frame) -> None:
        for row, line in enumerate(self.lines):
            frame.write_line(row, line)
        frame.set_cursor_position(self.cursor)


def test_viewport_clears_canvas_on_creation():
    canvas = MockCanvas()
    viewport = Viewport(canvas)
    assert viewport.area == Rect(10, 4)
    assert canvas.calls == [("clear",)]


def test_render_sequence():
    canvas = MockCanvas()
    viewport = Viewport(canvas)
    canvas.calls.clear()
    viewport.render(TextView(["hi"], Position(2, 0)))
    assert [call[0] for call in canvas.calls] == [
        "hide_cursor", "draw", "position_cursor", "show_cursor", "flush",
    ]
    assert ("position_cursor", 0, 2) in canvas.calls
    assert canvas.drawn[-1] == [(Position(0, 0), "h"), (Position(1, 0), "i")]


def test_second_render_of_same_view_draws_nothing():
    canvas = MockCanvas()
    viewport = Viewport(canvas)
    view = TextView(["hello", "world"])
    viewport.render(view)
    viewport.render(view)
    assert canvas.drawn[-1] == []


def test_render_draws_only_changes():
    canvas = MockCanvas()
    viewport = Viewport(canvas)
    viewport.render(TextView(["hello"]))
    viewport.render(TextView(["help"]))
    assert canvas.drawn[-1] == [(Position(3, 0), "p"), (Position(4, 0), " ")]


def test_frames_swap_and_next_frame_is_blank():
    canvas = MockCanvas()
    viewport = Viewport(canvas)
    first = viewport.current_frame
    viewport.render(TextView(["abc"]))
    assert viewport.previous_frame is first
    assert viewport.current_frame.line(0) == " " * 10
    assert viewport.previous_frame.line(0).startswith("abc")


def test_render_wraps_canvas_failures():
    canvas = MockCanvas(fail_on="draw")
    viewport = Viewport(canvas)
    with pytest.raises(CanvasError) as excinfo:
        viewport.render(TextView(["x"]))
    assert "unable to draw buffer diff" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_size_failure_raises_canvas_error():
    with pytest.raises(CanvasError):
        Viewport(MockCanvas(fail_on="size"))


def test_resize_recreates_frames():
    canvas = MockCanvas()
    viewport = Viewport(canvas)
    viewport.render(TextView(["abc"]))
    viewport.resize(Rect(6, 3))
    assert viewport.current_frame.area == Rect(6, 3)
    assert viewport.previous_frame.area == Rect(6, 3)
    viewport.render(TextView(["abc"]))
    assert len(canvas.drawn[-1]) == 3


def test_close_clears_and_flushes_once():
    canvas = MockCanvas()
    with Viewport(canvas) as viewport:
        canvas.calls.clear()
    viewport.close()
    assert canvas.calls == [("clear",), ("flush",)]
