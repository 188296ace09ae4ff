"""The status bar shown above the command line."""

from dataclasses import dataclass

import grapheme

from .constants import EditorConstants
from .geometry import Position, Rect
from .render import Frame, View


@dataclass
class StatusBar(View):
    area: Rect
    mode: str
    line_count: int
    cursor_position: Position
    file_name: str

    def render_to(self, frame: Frame) -> None:
        status = f"Mode: [{self.mode}]    File: {self.file_name}"
        line_indicator = (
            f"L: {self.cursor_position.row + 1}/{self.line_count} "
            f"C: {self.cursor_position.col + 1}"
        )
        used = grapheme.length(status) + grapheme.length(line_indicator)
        if self.area.width > used:
            status += " " * (self.area.width - used)
        status += line_indicator

        frame.write_line(
            self.area.top(),
            grapheme.slice(status, 0, self.area.width),
            EditorConstants.STATUS_FOREGROUND,
            EditorConstants.STATUS_BACKGROUND,
        )
