"""treedit - a terminal text editor with a built-in directory browser."""

import logging

from .engine import EditingSession
from .model import CursorPosition
from .buffer import TextBuffer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'EditingSession',
    'CursorPosition',
    'TextBuffer',
]
