"""Tests for frames and frame diffing."""

import pytest

from velm.errors import OutOfBoundsError
from velm.geometry import Color, Position, Rect, Rgb
from velm.render import Frame, diff


def test_empty_frame_cells_carry_absolute_positions():
    frame = Frame.empty(Rect.positioned(3, 2, 5, 7))
    assert len(frame.cells) == 6
    assert frame.cells[0].position == Position(5, 7)
    assert frame.cells[4].position == Position(6, 8)
    assert all(cell.symbol == " " for cell in frame.cells)


def test_index_of_is_row_major():
    frame = Frame.empty(Rect(4, 3))
    assert frame.index_of(Position(0, 0)) == 0
    assert frame.index_of(Position(3, 0)) == 3
    assert frame.index_of(Position(1, 2)) == 9


def test_index_of_outside_area_raises():
    frame = Frame.empty(Rect(4, 3))
    with pytest.raises(OutOfBoundsError):
        frame.index_of(Position(4, 0))
    with pytest.raises(OutOfBoundsError):
        frame.index_of(Position(0, 3))


def test_write_line_pads_and_truncates():
    frame = Frame.filled(Rect(5, 2), "x")
    frame.write_line(0, "ab")
    assert frame.line(0) == "ab   "
    frame.write_line(1, "abcdefgh")
    assert frame.line(1) == "abcde"


def test_write_line_colors_only_written_cells():
    frame = Frame.empty(Rect(4, 1))
    frame.write_line(0, "ab", Color.GRAY, Rgb(1, 2, 3))
    assert frame.cell(0, 0).foreground == Color.GRAY
    assert frame.cell(1, 0).background == Rgb(1, 2, 3)
    assert frame.cell(2, 0).foreground == Color.RESET


def test_write_line_one_cell_per_grapheme():
    frame = Frame.empty(Rect(4, 1))
    frame.write_line(0, "é\tz")
    assert frame.cell(0, 0).symbol == "é"
    assert frame.cell(1, 0).symbol == " "
    assert frame.cell(2, 0).symbol == "z"


def test_write_line_outside_frame_raises():
    frame = Frame.empty(Rect(4, 2))
    with pytest.raises(OutOfBoundsError):
        frame.write_line(2, "x")


def test_reset_blanks_cells_colors_and_cursor():
    frame = Frame.empty(Rect(3, 1))
    frame.write_line(0, "abc", Color.RED)
    frame.set_cursor_position(Position(2, 0))
    frame.reset()
    assert frame.line(0) == "   "
    assert frame.cell(0, 0).foreground == Color.RESET
    assert frame.cursor_position == Position()


def test_diff_of_identical_frames_is_empty():
    assert diff(Frame.empty(Rect(3, 3)), Frame.empty(Rect(3, 3))) == []


def test_diff_returns_changed_cells_in_order():
    previous = Frame.empty(Rect(3, 2))
    current = Frame.empty(Rect(3, 2))
    current.write_line(1, "a c")
    current.write_line(0, "  z")
    changes = diff(previous, current)
    assert [(c.position, c.symbol) for c in changes] == [
        (Position(2, 0), "z"),
        (Position(0, 1), "a"),
        (Position(2, 1), "c"),
    ]


def test_diff_detects_color_only_changes():
    previous = Frame.empty(Rect(2, 1))
    current = Frame.empty(Rect(2, 1))
    previous.write_line(0, "ab")
    current.write_line(0, "ab", Color.BLUE)
    assert len(diff(previous, current)) == 2


def test_diff_of_different_geometry_raises():
    with pytest.raises(ValueError):
        diff(Frame.empty(Rect(2, 2)), Frame.empty(Rect(3, 2)))


def test_single_cell_change_diffs_to_that_cell():
    previous = Frame.empty(Rect.positioned(4, 3, 1, 1))
    current = Frame.empty(Rect.positioned(4, 3, 1, 1))
    current.cell(3, 2).symbol = "q"
    assert diff(previous, current) == [current.cell(3, 2)]
