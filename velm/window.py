"""The root component: buffers, command line, status bar and the current mode."""

from __future__ import annotations

import logging
from typing import Optional

from .buffer import Buffer
from .commands import Command, Delay
from .component import Component
from .constants import EditorConstants
from .document import Document
from .geometry import Position, Rect
from .keyboard import Key
from .messages import (
    ClearStatusMessage,
    EndCommandLineInput,
    EnterMode,
    Message,
    Resize,
    ShowStatusMessage,
)
from .mode import Execute, Insert, Mode, Normal
from .render import Frame, View
from .settings import Settings
from .status_bar import StatusBar
from .text_input import TextInput
from .welcome import Welcome

logger = logging.getLogger(__name__)


class Window(Component, View):
    """Owns every other component and routes messages to them.

    In command mode all messages go to the command line; otherwise they go
    to the active buffer. The two bottom rows always hold the status bar and
    the command line.
    """

    def __init__(self, size: Rect, mode: Optional[Mode] = None,
                 settings: Optional[Settings] = None):
        self.size = size
        self.settings = settings or Settings()
        self.mode: Mode = mode or Normal()
        self.buffers: list[Buffer] = []
        self.active_buffer_index = 0
        self.status_message: Optional[str] = None
        self.command_line = TextInput(
            self.settings.command_prompt,
            self.settings.command_placeholder,
            Position(size.left(), size.bottom()),
        )
        if isinstance(self.mode, Execute):
            self.command_line.focus(self.mode.row, self.mode.cursor_position.col)

    @property
    def active_buffer(self) -> Optional[Buffer]:
        if 0 <= self.active_buffer_index < len(self.buffers):
            return self.buffers[self.active_buffer_index]
        return None

    def open(self, document: Document) -> Buffer:
        """Add a buffer for ``document`` and make it the active one."""
        buffer = Buffer(self.size, document)
        buffer.focused = not isinstance(self.mode, Execute)
        self.buffers.append(buffer)
        self.active_buffer_index = len(self.buffers) - 1
        return buffer

    def handle_key(self, key: Key) -> Optional[Message]:
        """Translate a key press using the current mode."""
        return self.mode.handle(key)

    def _enter_mode(self, mode: Mode) -> None:
        logger.debug("Entering %s mode", mode)
        if isinstance(mode, Insert) and self.active_buffer is None:
            self.open(Document())

        buffer = self.active_buffer
        if isinstance(mode, Execute):
            self.command_line.focus(mode.row, mode.cursor_position.col)
            if buffer is not None:
                buffer.focused = False
        else:
            self.command_line.unfocus()
            if buffer is not None:
                buffer.focused = True
        self.mode = mode

    def _resize(self, width: int, height: int) -> None:
        self.size = Rect(width, height, self.size.position)
        self.command_line.position = Position(self.size.left(), self.size.bottom())
        for buffer in self.buffers:
            buffer.resize(self.size)

    def update(self, message: Message) -> Optional[Command]:
        if isinstance(message, EnterMode):
            self._enter_mode(message.mode)
            return None
        if isinstance(message, Resize):
            self._resize(message.width, message.height)
            return None
        if isinstance(message, ShowStatusMessage):
            self.status_message = message.text
            return Delay(self.settings.status_message_timeout, ClearStatusMessage(message.text))
        if isinstance(message, ClearStatusMessage):
            if self.status_message == message.text:
                self.status_message = None
            return None

        if isinstance(self.mode, Execute):
            command = self.command_line.update(message)
            if isinstance(message, EndCommandLineInput):
                # The parsed command runs from normal mode
                self._enter_mode(Normal())
            return command

        buffer = self.active_buffer
        if buffer is None:
            logger.debug("No buffer for %r, dropping it", message)
            return None
        return buffer.update(message)

    def render_to(self, frame: Frame) -> None:
        if self.size.area() == 0:
            return
        buffer = self.active_buffer
        if buffer is None:
            Welcome(self.size).render_to(frame)
            frame.set_cursor_position(self.size.position)
        else:
            buffer.render_to(frame)

        if self.size.height >= EditorConstants.RESERVED_ROWS:
            cursor = buffer.cursor_position if buffer is not None else Position()
            StatusBar(
                area=Rect.positioned(self.size.width, 1, self.size.left(), self.size.bottom() - 1),
                mode=str(self.mode),
                line_count=buffer.lines_in_document() if buffer is not None else 0,
                cursor_position=cursor,
                file_name=buffer.document_name() if buffer is not None else "",
            ).render_to(frame)

        if self.status_message and not self.command_line.focused:
            frame.write_line(self.size.bottom(), self.status_message)
        else:
            self.command_line.render_to(frame)
