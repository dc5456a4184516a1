"""Vertical and horizontal scroll offsets that keep the cursor visible."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from . import metrics
from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import TextBuffer
    from .model import CursorPosition


class Viewport:
    """Scroll state of the editor text area.

    ``top`` is the first visible row and ``left`` the first visible display
    column. Both only move as far as needed to bring the cursor back into
    the visible area.
    """

    def __init__(self, height: int = EditorConstants.DEFAULT_VIEW_HEIGHT,
                 width: int = EditorConstants.DEFAULT_VIEW_WIDTH,
                 tab_width: int = EditorConstants.TAB_WIDTH):
        self.top = 0
        self.left = 0
        self.height = height
        self.width = width
        self.tab_width = tab_width

    def reset(self) -> None:
        self.top = 0
        self.left = 0

    def resize(self, height: int, width: int) -> None:
        self.height = max(1, height)
        self.width = max(1, width)

    def follow_row(self, row: int, height: Optional[int] = None) -> None:
        h = max(1, height or self.height)
        if row < self.top:
            self.top = row
        elif row >= self.top + h:
            self.top = max(0, row - h + 1)

    def follow_column(self, x: int, width: Optional[int] = None) -> None:
        """Keep display column x within [left, left + width)."""
        w = max(1, width or self.width)
        if x < self.left:
            self.left = x
        elif x >= self.left + w:
            self.left = max(0, x - w + 1)

    def follow(self, buffer: "TextBuffer", cursor: "CursorPosition",
               height: Optional[int] = None, width: Optional[int] = None) -> None:
        """Adjust both offsets for the cursor, remembering the area size."""
        if height:
            self.height = max(1, height)
        if width:
            self.width = max(1, width)
        self.follow_row(cursor.row)
        line = buffer.line(cursor.row)
        self.follow_column(metrics.display_width(line, cursor.col, self.tab_width))

    def scroll_up(self) -> None:
        if self.top > 0:
            self.top -= 1

    def scroll_down(self, line_count: int) -> None:
        if self.top < max(0, line_count - 1):
            self.top += 1
