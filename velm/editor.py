"""The editor event loop.

A single asyncio coroutine owns the component tree and the viewport. It
waits on four channels at once: the input event stream, an error queue, a
message queue and a command queue. Exactly one item is handled per
iteration, and every processed message is followed by a full render, so the
screen never shows a half-applied update.

Commands run as separate tasks so a slow one never holds up input. They
never touch components; their only effect is the message they put back on
the message queue.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import AsyncIterable, AsyncIterator, Optional

from .commands import Command
from .document import Document
from .errors import EditorError, InputError, VelmError
from .geometry import Rect
from .keyboard import Event, KeyPressed, MouseInputReceived, ReadFailed, WindowResized
from .messages import Message, Quit, Resize
from .render import Canvas, Viewport
from .settings import Settings
from .window import Window

logger = logging.getLogger(__name__)

INPUT = "input"
ERROR = "error"
MESSAGE = "message"
COMMAND = "command"


class Editor:
    """Runs a ``Window`` against a canvas and an input event stream."""

    def __init__(self, canvas: Canvas, document: Optional[Document] = None,
                 settings: Optional[Settings] = None):
        self.viewport = Viewport(canvas)
        self.window = Window(self.viewport.area, settings=settings)
        if document is not None:
            self.window.open(document)
        self.running = False
        self._errors: asyncio.Queue = asyncio.Queue()
        self._messages: asyncio.Queue = asyncio.Queue()
        self._commands: asyncio.Queue = asyncio.Queue()
        self._tasks: set[asyncio.Task] = set()

    def render(self) -> None:
        self.viewport.render(self.window)

    def dispatch(self, message: Message) -> None:
        """Apply one message to the component tree, then render."""
        logger.debug("Dispatching %r", message)
        if isinstance(message, Quit):
            self.running = False
        command = self.window.update(message)
        if command is not None:
            self._commands.put_nowait(command)
        self.render()

    def _handle_event(self, event: Event) -> None:
        if isinstance(event, KeyPressed):
            # Translated and applied at once so the next key sees the new mode
            message = self.window.handle_key(event.key)
            if message is not None:
                self.dispatch(message)
        elif isinstance(event, WindowResized):
            self.viewport.resize(Rect(event.width, event.height))
            self.dispatch(Resize(event.width, event.height))
        elif isinstance(event, ReadFailed):
            self._errors.put_nowait(event.error)
        elif isinstance(event, MouseInputReceived):
            pass

    def _spawn(self, command: Command) -> None:
        logger.debug("Spawning %r", command)
        task = asyncio.get_running_loop().create_task(self._execute(command))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _execute(self, command: Command) -> None:
        try:
            message = await command.execute()
        except Exception as e:
            await self._errors.put(e)
            return
        await self._messages.put(message)

    def _idle(self, waiters: dict[asyncio.Future, str]) -> bool:
        return (
            not self._tasks
            and self._messages.empty()
            and self._commands.empty()
            and not any(f.done() for f in waiters)
        )

    async def consume(self, events: AsyncIterable[Event]) -> None:
        """Run until ``Quit``, an error, or the end of the input stream.

        Raises:
            VelmError: Whatever error ended the loop.
        """
        stream: AsyncIterator[Event] = events.__aiter__()
        sources = {
            INPUT: stream.__anext__,
            ERROR: self._errors.get,
            MESSAGE: self._messages.get,
            COMMAND: self._commands.get,
        }
        waiters: dict[asyncio.Future, str] = {}

        def listen(channel: str) -> None:
            waiters[asyncio.ensure_future(sources[channel]())] = channel

        for channel in sources:
            listen(channel)

        self.running = True
        try:
            self.render()
            while self.running:
                if INPUT not in waiters.values() and self._idle(waiters):
                    logger.debug("Input exhausted, stopping")
                    break
                done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
                future = random.choice(list(done))
                channel = waiters.pop(future)

                if channel == INPUT:
                    try:
                        event = future.result()
                    except StopAsyncIteration:
                        continue
                    listen(INPUT)
                    self._handle_event(event)
                elif channel == ERROR:
                    self._raise(future.result())
                elif channel == MESSAGE:
                    listen(MESSAGE)
                    self.dispatch(future.result())
                elif channel == COMMAND:
                    listen(COMMAND)
                    self._spawn(future.result())
        finally:
            self.running = False
            await self._shutdown(waiters, stream)

    @staticmethod
    def _raise(error: BaseException) -> None:
        if isinstance(error, VelmError):
            raise error
        if isinstance(error, OSError):
            raise InputError("unable to read input events") from error
        raise EditorError("command failed") from error

    async def _shutdown(self, waiters: dict[asyncio.Future, str],
                        stream: AsyncIterator[Event]) -> None:
        for future in waiters:
            future.cancel()
        await asyncio.gather(*waiters, return_exceptions=True)
        aclose = getattr(stream, "aclose", None)
        if aclose is not None:
            await aclose()
        self.viewport.close()
