"""The screen shown before any buffer is open."""

from dataclasses import dataclass

from .constants import EditorConstants
from .geometry import Rect
from .render import Frame, View
from .version import get_version


@dataclass
class Welcome(View):
    size: Rect

    def render_to(self, frame: Frame) -> None:
        message = EditorConstants.WELCOME_MESSAGE.format(get_version())
        padding = max(self.size.width - len(message), 0) // 2
        message = EditorConstants.EMPTY_ROW_MARKER + " " * max(padding - 1, 0) + message

        text_rows = max(self.size.height - EditorConstants.RESERVED_ROWS, 0)
        for row in range(text_rows):
            if row == self.size.height // 3:
                frame.write_line(self.size.top() + row, message)
            else:
                frame.write_line(self.size.top() + row, EditorConstants.EMPTY_ROW_MARKER,
                                 EditorConstants.EMPTY_ROW_FOREGROUND)
