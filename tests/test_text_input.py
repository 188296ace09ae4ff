"""Tests for the command line text input."""

from velm.commands import EmitMessage, ParseCommandLine
from velm.geometry import Position, Rect
from velm.messages import (
    AbortCommandLineInput,
    DeleteCharBackward,
    DeleteCharForward,
    EndCommandLineInput,
    EnterMode,
    InsertChar,
    MoveCursorLeft,
    MoveCursorLineEnd,
    MoveCursorLineStart,
    MoveCursorRight,
)
from velm.mode import Normal
from velm.render import Frame
from velm.row import Row
from velm.text_input import TextInput


def command_line():
    return TextInput(":", " Press : to enter a command...", Position(0, 3))


def make_input():
    text_input = command_line()
    text_input.focus()
    return text_input


def type_text(text_input, text):
    for ch in text:
        text_input.update(InsertChar(ch))


def test_typing_inserts_at_cursor():
    text_input = make_input()
    type_text(text_input, "wq")
    text_input.update(MoveCursorLeft(1))
    text_input.update(InsertChar(" "))
    assert text_input.value.contents() == "w q"
    assert text_input.cursor_position == 2


def test_cursor_movement_is_clamped():
    text_input = make_input()
    type_text(text_input, "abc")
    text_input.update(MoveCursorRight(5))
    assert text_input.cursor_position == 3
    text_input.update(MoveCursorLeft(5))
    assert text_input.cursor_position == 0
    text_input.update(MoveCursorLineEnd())
    assert text_input.cursor_position == 3
    text_input.update(MoveCursorLineStart())
    assert text_input.cursor_position == 0


def test_delete_forward_and_backward():
    text_input = make_input()
    type_text(text_input, "abcd")
    text_input.update(DeleteCharBackward())
    assert text_input.value.contents() == "abc"
    text_input.update(MoveCursorLineStart())
    text_input.update(DeleteCharForward())
    assert text_input.value.contents() == "bc"
    assert text_input.cursor_position == 0


def test_backspace_at_start_of_non_empty_line_does_nothing():
    text_input = make_input()
    type_text(text_input, "ab")
    text_input.update(MoveCursorLineStart())
    assert text_input.update(DeleteCharBackward()) is None
    assert text_input.value.contents() == "ab"


def test_backspace_on_empty_line_aborts():
    text_input = make_input()
    assert text_input.update(DeleteCharBackward()) == EmitMessage(EnterMode(Normal()))


def test_enter_parses_and_resets():
    text_input = make_input()
    type_text(text_input, "w out.txt")
    assert text_input.update(EndCommandLineInput()) == ParseCommandLine("w out.txt")
    assert text_input.value.is_empty()
    assert text_input.cursor_position == 0


def test_abort_resets_and_returns_to_normal():
    text_input = make_input()
    type_text(text_input, "q")
    assert text_input.update(AbortCommandLineInput()) == EmitMessage(EnterMode(Normal()))
    assert text_input.value.is_empty()


def test_focus_with_seed_value():
    text_input = command_line()
    text_input.focus(Row("w name"), 10)
    assert text_input.value.contents() == "w name"
    assert text_input.cursor_position == 6


def test_renders_placeholder_when_unfocused_and_empty():
    text_input = command_line()
    frame = Frame.empty(Rect(40, 4))
    text_input.render_to(frame)
    assert frame.line(3).rstrip() == " Press : to enter a command..."
    assert frame.cursor_position == Position()


def test_renders_prompt_value_and_cursor_when_focused():
    text_input = make_input()
    type_text(text_input, "wq")
    text_input.update(MoveCursorLeft(1))
    frame = Frame.empty(Rect(10, 4))
    text_input.render_to(frame)
    assert frame.line(3) == ":wq       "
    assert frame.cursor_position == Position(2, 3)
