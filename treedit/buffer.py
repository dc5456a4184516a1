"""Line-based text buffer."""

from __future__ import annotations

from typing import Iterable, Optional

from . import metrics
from .model import CursorPosition


class TextBuffer:
    """Ordered list of lines without newline characters.

    The buffer is never empty: it always holds at least one (possibly empty)
    line. Every entry point clamps its row/column arguments and snaps columns
    to a grapheme-cluster boundary before indexing.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self.lines: list[str] = [""]
        if lines is not None:
            self.replace_all(lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def line(self, row: int) -> str:
        return self.lines[self._clamp_row(row)]

    def snapshot(self) -> list[str]:
        return list(self.lines)

    def replace_all(self, lines: Iterable[str]) -> None:
        """Replace the whole content (used by undo/redo and file load)."""
        self.lines = list(lines) or [""]

    def _clamp_row(self, row: int) -> int:
        return max(0, min(row, len(self.lines) - 1))

    def clamp(self, row: int, col: int) -> tuple[int, int]:
        """Clamp a position into the buffer, snapped to a cluster boundary."""
        row = self._clamp_row(row)
        return row, metrics.snap_to_boundary(self.lines[row], col)

    def end_position(self) -> tuple[int, int]:
        row = len(self.lines) - 1
        return row, len(self.lines[row])

    def insert(self, row: int, col: int, text: str) -> tuple[int, int]:
        """Insert text (no newlines) and return the position just after it."""
        row, col = self.clamp(row, col)
        line = self.lines[row]
        line = line[:col] + text + line[col:]
        self.lines[row] = line
        # The text may merge with the cluster that follows it
        end = col + len(text)
        for offset in metrics.boundaries(line):
            if offset >= end:
                return row, offset
        return row, len(line)

    def insert_newline(self, row: int, col: int) -> tuple[int, int]:
        """Split the line at col; the tail becomes a new row below."""
        row, col = self.clamp(row, col)
        line = self.lines[row]
        self.lines[row] = line[:col]
        self.lines.insert(row + 1, line[col:])
        return row + 1, 0

    def delete_backward(self, row: int, col: int) -> Optional[tuple[int, int]]:
        """Delete the code point before col, or join with the previous line.

        Only one code point goes, so a combining mark typed after a letter
        is removed on its own. The returned column is the nearest cluster
        boundary at or before the deletion point.

        Returns the new cursor position, or None when at document start
        (nothing is deleted).
        """
        row, col = self.clamp(row, col)
        if col > 0:
            line = self.lines[row]
            line = line[:col - 1] + line[col:]
            self.lines[row] = line
            return row, metrics.snap_to_boundary(line, col - 1)
        if row == 0:
            return None
        previous = self.lines[row - 1]
        self.lines[row - 1] = previous + self.lines[row]
        del self.lines[row]
        return row - 1, len(previous)

    def delete_forward(self, row: int, col: int) -> bool:
        """Delete the cluster after col, or join the next line at line end."""
        row, col = self.clamp(row, col)
        line = self.lines[row]
        if col < len(line):
            end = metrics.next_boundary(line, col)
            self.lines[row] = line[:col] + line[end:]
            return True
        if row + 1 >= len(self.lines):
            return False
        self.lines[row] = line + self.lines[row + 1]
        del self.lines[row + 1]
        return True

    def _normalize(self, start, end) -> tuple[tuple[int, int], tuple[int, int]]:
        start = self.clamp(*_as_tuple(start))
        end = self.clamp(*_as_tuple(end))
        if end < start:
            start, end = end, start
        return start, end

    def delete_range(self, start, end) -> tuple[int, int]:
        """Remove the text between two positions and return the start position.

        The prefix of the first row and the suffix of the last row are
        spliced into a single row; rows in between are removed.
        """
        (start_row, start_col), (end_row, end_col) = self._normalize(start, end)
        head = self.lines[start_row][:start_col]
        tail = self.lines[end_row][end_col:]
        self.lines[start_row:end_row + 1] = [head + tail]
        return start_row, start_col

    def text_range(self, start, end) -> str:
        """Text between two positions, rows separated by newlines."""
        (start_row, start_col), (end_row, end_col) = self._normalize(start, end)
        if start_row == end_row:
            return self.lines[start_row][start_col:end_col]
        parts = [self.lines[start_row][start_col:]]
        parts.extend(self.lines[start_row + 1:end_row])
        parts.append(self.lines[end_row][:end_col])
        return "\n".join(parts)


def _as_tuple(position) -> tuple[int, int]:
    if isinstance(position, CursorPosition):
        return position.row, position.col
    row, col = position
    return row, col
