"""Cursor and selection model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from . import metrics
from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import TextBuffer


@dataclass
class CursorPosition:
    row: int = 0
    col: int = 0

    def __lt__(self, other):
        if self.row != other.row:
            return self.row < other.row
        return self.col < other.col

    def __le__(self, other):
        return not other < self

    def __ge__(self, other):
        return not self < other

    def as_tuple(self) -> tuple[int, int]:
        return self.row, self.col

    def copy(self) -> "CursorPosition":
        return CursorPosition(self.row, self.col)


class CursorModel:
    """Cursor, anchor-based selection and grapheme-aware movement.

    The cursor column is a ``str`` offset into the current row that always
    sits on a grapheme-cluster boundary.
    """

    def __init__(self, buffer: "TextBuffer",
                 accel_base_step: int = EditorConstants.ACCEL_BASE_STEP,
                 accel_max_step: int = EditorConstants.ACCEL_MAX_STEP):
        self.buffer = buffer
        self.position = CursorPosition()
        self.anchor: Optional[CursorPosition] = None
        self.selection_end: Optional[CursorPosition] = None
        # True while a shift-selection gesture is in progress (UI flag)
        self.selecting = False
        self.accel_base_step = accel_base_step
        self.accel_max_step = accel_max_step
        self.accel_step = accel_base_step

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def col(self) -> int:
        return self.position.col

    def _line(self) -> str:
        return self.buffer.lines[self.position.row]

    def goto(self, row: int, col: int) -> None:
        """Place the cursor, clamped into the buffer."""
        self.position.row, self.position.col = self.buffer.clamp(row, col)

    def clamp(self) -> None:
        """Re-validate the cursor after the buffer changed underneath it."""
        self.goto(self.position.row, self.position.col)

    # --- Plain moves ---

    def left(self) -> None:
        if self.position.col > 0:
            self.position.col = metrics.prev_boundary(self._line(), self.position.col)
        elif self.position.row > 0:
            self.position.row -= 1
            self.position.col = len(self._line())

    def right(self) -> None:
        line = self._line()
        if self.position.col < len(line):
            self.position.col = metrics.next_boundary(line, self.position.col)
        elif self.position.row + 1 < self.buffer.line_count:
            self.position.row += 1
            self.position.col = 0

    def up(self) -> None:
        if self.position.row > 0:
            self.goto(self.position.row - 1, self.position.col)

    def down(self) -> None:
        if self.position.row + 1 < self.buffer.line_count:
            self.goto(self.position.row + 1, self.position.col)

    def home(self) -> None:
        self.position.col = 0

    def end_of_line(self) -> None:
        self.position.col = len(self._line())

    # --- Word moves ---

    def word_left(self) -> None:
        """Step back until (and including) a space/tab boundary."""
        row, col = self.position.as_tuple()
        if col == 0:
            if row > 0:
                self.position.row = row - 1
                self.position.col = len(self._line())
            return
        line = self._line()
        clusters = metrics.graphemes(line)
        idx = metrics.grapheme_index(line, col)
        while idx > 0:
            idx -= 1
            if clusters[idx] in metrics.WHITESPACE_CLUSTERS:
                break
        self.position.col = metrics.offset_of(line, idx)

    def word_right(self) -> None:
        """Step forward past the next whitespace run, or to line end."""
        line = self._line()
        row, col = self.position.as_tuple()
        if col >= len(line):
            if row + 1 < self.buffer.line_count:
                self.position.row = row + 1
                self.position.col = 0
            return
        clusters = metrics.graphemes(line)
        idx = metrics.grapheme_index(line, col)
        while idx < len(clusters) and clusters[idx] not in metrics.WHITESPACE_CLUSTERS:
            idx += 1
        while idx < len(clusters) and clusters[idx] in metrics.WHITESPACE_CLUSTERS:
            idx += 1
        self.position.col = metrics.offset_of(line, idx)

    # --- Accelerated moves ---

    def accel_left(self) -> None:
        for _ in range(self.accel_step):
            self.left()
        self.accel_step = min(self.accel_step * 2, self.accel_max_step)

    def accel_right(self) -> None:
        for _ in range(self.accel_step):
            self.right()
        self.accel_step = min(self.accel_step * 2, self.accel_max_step)

    def reset_accel(self) -> None:
        self.accel_step = self.accel_base_step

    # --- Selection ---

    def begin_extend(self) -> None:
        """Record the pre-move position as anchor when a gesture starts."""
        self.selecting = True
        if self.anchor is None:
            self.anchor = self.position.copy()

    def finish_extend(self) -> None:
        """Move the live endpoint to the cursor."""
        self.selection_end = self.position.copy()

    def select_all(self) -> None:
        self.anchor = CursorPosition(0, 0)
        self.goto(*self.buffer.end_position())
        self.selection_end = self.position.copy()
        self.selecting = True

    def clear_selection(self) -> None:
        self.anchor = None
        self.selection_end = None
        self.selecting = False

    def selection_bounds(self) -> Optional[tuple[CursorPosition, CursorPosition]]:
        """Normalized (start, end), including empty ranges; None without a selection."""
        if self.anchor is None or self.selection_end is None:
            return None
        start = CursorPosition(*self.buffer.clamp(*self.anchor.as_tuple()))
        end = CursorPosition(*self.buffer.clamp(*self.selection_end.as_tuple()))
        if end < start:
            start, end = end, start
        return start, end

    def selection_range(self) -> Optional[tuple[CursorPosition, CursorPosition]]:
        """Normalized non-empty selection, or None."""
        bounds = self.selection_bounds()
        if bounds is None or bounds[0] == bounds[1]:
            return None
        return bounds

    def has_selection(self) -> bool:
        return self.selection_range() is not None

    def selected_text(self) -> str:
        bounds = self.selection_range()
        if bounds is None:
            return ""
        return self.buffer.text_range(bounds[0], bounds[1])
