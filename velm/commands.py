"""Commands: deferred work that produces exactly one message.

``Component.update`` never blocks. Anything that has to happen later, or
that needs another trip through ``update`` (parsing a finished command
line, a timer), is returned as a ``Command``. The editor runs each command
as its own task and feeds the resulting message back into the loop.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .messages import EnterMode, Message
from .mode import Execute, Normal


class Command(ABC):
    """Base class for deferred editor work."""

    @abstractmethod
    async def execute(self) -> Message:
        """Run the command and return the message it produces."""


@dataclass(frozen=True)
class EmitMessage(Command):
    """Re-enter a message through the event loop."""
    message: Message

    async def execute(self) -> Message:
        return self.message


@dataclass(frozen=True)
class ParseCommandLine(Command):
    """Interpret a finished command line.

    Produces the parsed message, or a return to normal mode when the line
    is not a known command.
    """
    text: str

    async def execute(self) -> Message:
        return Execute.parse(self.text) or EnterMode(Normal())


@dataclass(frozen=True)
class Delay(Command):
    """Produce ``message`` after ``seconds``."""
    seconds: float
    message: Message

    async def execute(self) -> Message:
        await asyncio.sleep(self.seconds)
        return self.message
