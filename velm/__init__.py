"""Velm - a modal terminal text editor."""

from .document import Document
from .editor import Editor
from .errors import VelmError
from .row import Row

__all__ = [
    'Document',
    'Editor',
    'Row',
    'VelmError',
]
