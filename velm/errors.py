"""Exceptions raised by the velm editor.

Every error that can end an editing session derives from ``VelmError`` so
the CLI can report it uniformly. The underlying cause is always chained
(``raise ... from e``) so the report carries the original failure.
"""


class VelmError(Exception):
    """Base class for all editor errors."""


class OutOfRangeError(VelmError, IndexError):
    """Raised when an edit addresses a row past the end of a document."""


class OutOfBoundsError(VelmError, IndexError):
    """Raised when a frame is accessed outside of its area."""


class DocumentIOError(VelmError):
    """Raised when a document cannot be read from or written to disk."""


class CanvasError(VelmError):
    """Raised when the drawing surface fails during a render step."""


class InputError(VelmError):
    """Raised when the input event stream reports a read failure."""


class EditorError(VelmError):
    """Raised when a command task fails with an unexpected exception."""
