"""The component contract, the model half of the editor's elm architecture."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .commands import Command
    from .messages import Message


class Component(ABC):
    """Something that reacts to messages.

    ``update`` may only change the component's own state (and that of its
    children), must not block, and returns at most one deferred command.
    Failures are raised as ``VelmError`` subclasses.
    """

    @abstractmethod
    def update(self, message: "Message") -> "Optional[Command]":
        """Apply a message."""
