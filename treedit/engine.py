"""Editing engine: the session object every front end drives.

An :class:`EditingSession` owns the text buffer, the cursor/selection model,
the undo history, the clipboard bridge and the viewport of one open
document. Every operation clamps its inputs, keeps the cursor on a grapheme
boundary and re-runs the viewport follow logic, so callers never have to
repair state after an edit.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from . import fileio, search
from .buffer import TextBuffer
from .clipboard import MemoryClipboard, SystemClipboard
from .constants import EditorConstants
from .model import CursorModel, CursorPosition
from .settings import EditorSettings
from .undo import UndoManager
from .viewport import Viewport

logger = logging.getLogger(__name__)

MOVES = (
    'left', 'right', 'up', 'down', 'home', 'end_of_line',
    'word_left', 'word_right', 'accel_left', 'accel_right',
)


class EditingSession:
    """State and operations of the single open document."""

    def __init__(self, lines: Optional[Iterable[str]] = None, path: Optional[str] = None,
                 clipboard=None, settings: Optional[EditorSettings] = None):
        settings = settings or EditorSettings()
        self.settings = settings
        self.buffer = TextBuffer(lines)
        self.cursor = CursorModel(self.buffer, settings.accel_base_step, settings.accel_max_step)
        self.history = UndoManager(settings.undo_limit)
        if clipboard is None:
            clipboard = SystemClipboard() if settings.use_system_clipboard else MemoryClipboard()
        self.clipboard = clipboard
        self.viewport = Viewport(tab_width=settings.tab_width)
        self.current_path = path
        self.modified = False

    # --- Queries ---

    @property
    def lines(self) -> list[str]:
        return self.buffer.lines

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def position(self) -> CursorPosition:
        return self.cursor.position

    def selection_range(self) -> Optional[tuple[CursorPosition, CursorPosition]]:
        return self.cursor.selection_range()

    def selected_text(self) -> str:
        return self.cursor.selected_text()

    def line_number_width(self) -> int:
        return max(len(str(self.buffer.line_count)), EditorConstants.MIN_LINE_NUMBER_WIDTH)

    # --- Internal helpers ---

    def _checkpoint(self) -> None:
        self.history.checkpoint(self.buffer.snapshot())
        self.modified = True

    def _follow(self) -> None:
        self.viewport.follow(self.buffer, self.cursor.position)

    def _remove_selection(self) -> None:
        bounds = self.cursor.selection_range()
        if bounds is not None:
            row, col = self.buffer.delete_range(bounds[0], bounds[1])
            self.cursor.goto(row, col)
        self.cursor.clear_selection()

    # --- Editing ---

    def insert_char(self, char: str) -> bool:
        """Insert one typed character, replacing a non-empty selection."""
        if char == '\n':
            return self.insert_newline()
        if not char:
            return False
        self._checkpoint()
        self._remove_selection()
        row, col = self.buffer.insert(self.cursor.row, self.cursor.col, char)
        self.cursor.goto(row, col)
        self._follow()
        return True

    def insert_newline(self) -> bool:
        self._checkpoint()
        self._remove_selection()
        row, col = self.buffer.insert_newline(self.cursor.row, self.cursor.col)
        self.cursor.goto(row, col)
        self._follow()
        return True

    def backspace(self) -> bool:
        """Delete the selection, or the code point before the cursor.

        At document start nothing changes and no checkpoint is recorded.
        """
        if self.cursor.has_selection():
            return self.delete_selection()
        self.cursor.clear_selection()
        self.cursor.clamp()
        if self.cursor.position.as_tuple() == (0, 0):
            return False
        self._checkpoint()
        new_position = self.buffer.delete_backward(self.cursor.row, self.cursor.col)
        if new_position is not None:
            self.cursor.goto(*new_position)
        self._follow()
        return True

    def delete_forward(self) -> bool:
        """Delete the selection, or the grapheme after the cursor."""
        if self.cursor.has_selection():
            return self.delete_selection()
        self.cursor.clear_selection()
        self.cursor.clamp()
        if self.cursor.position.as_tuple() == self.buffer.end_position():
            return False
        self._checkpoint()
        self.buffer.delete_forward(self.cursor.row, self.cursor.col)
        self.cursor.clamp()
        self._follow()
        return True

    def delete_selection(self) -> bool:
        if not self.cursor.has_selection():
            self.cursor.clear_selection()
            return False
        self._checkpoint()
        self._remove_selection()
        self._follow()
        return True

    # --- Clipboard ---

    def copy(self) -> bool:
        """Copy the selection to the clipboard; False when nothing was copied."""
        text = self.cursor.selected_text()
        if not text:
            return False
        return self.clipboard.set(text)

    def cut(self) -> bool:
        if not self.cursor.has_selection():
            return False
        if not self.copy():
            logger.debug("Cut continues without clipboard")
        return self.delete_selection()

    def paste(self) -> bool:
        """Insert the clipboard at the cursor as a single undo step."""
        content = self.clipboard.get()
        if not content:
            return False
        content = content.replace('\r\n', '\n')
        self._checkpoint()
        self._remove_selection()
        row, col = self.cursor.row, self.cursor.col
        segments = content.split('\n')
        for i, segment in enumerate(segments):
            row, col = self.buffer.insert(row, col, segment)
            if i < len(segments) - 1:
                row, col = self.buffer.insert_newline(row, col)
        self.cursor.goto(row, col)
        self._follow()
        return True

    # --- History ---

    def _restore(self, lines: list[str]) -> None:
        self.buffer.replace_all(lines)
        self.cursor.clear_selection()
        self.cursor.clamp()
        self.modified = True
        self._follow()

    def undo(self) -> bool:
        lines = self.history.undo(self.buffer.snapshot())
        if lines is None:
            return False
        self._restore(lines)
        return True

    def redo(self) -> bool:
        lines = self.history.redo(self.buffer.snapshot())
        if lines is None:
            return False
        self._restore(lines)
        return True

    # --- Movement and selection ---

    def move(self, direction: str, extend: bool = False) -> None:
        """Move the cursor; with extend, grow the selection instead of clearing it."""
        if direction not in MOVES:
            raise ValueError(f"Unknown cursor move: {direction}")
        if extend:
            self.cursor.begin_extend()
        else:
            self.cursor.clear_selection()
        getattr(self.cursor, direction)()
        if extend:
            self.cursor.finish_extend()
        self._follow()

    def word_left(self, extend: bool = False) -> None:
        self.move('word_left', extend)

    def word_right(self, extend: bool = False) -> None:
        self.move('word_right', extend)

    def accel_left(self, extend: bool = False) -> None:
        self.move('accel_left', extend)

    def accel_right(self, extend: bool = False) -> None:
        self.move('accel_right', extend)

    def reset_accel(self) -> None:
        self.cursor.reset_accel()

    def select_all(self) -> None:
        self.cursor.select_all()
        self._follow()

    def clear_selection(self) -> None:
        self.cursor.clear_selection()

    def scroll_up(self) -> None:
        self.viewport.scroll_up()

    def scroll_down(self) -> None:
        self.viewport.scroll_down(self.buffer.line_count)

    def search(self, query: str) -> bool:
        """Move the cursor to the next match of query; False if none."""
        match = search.find(self.buffer.lines, query, self.cursor.row)
        if match is None:
            return False
        self.cursor.clear_selection()
        self.cursor.goto(*match)
        self._follow()
        return True

    # --- Documents ---

    def load_document(self, lines: Iterable[str], path: Optional[str] = None) -> None:
        """Replace the document wholesale and reset per-document state."""
        self.buffer.replace_all(lines)
        self.cursor.clear_selection()
        self.cursor.reset_accel()
        self.cursor.goto(0, 0)
        self.history.clear()
        self.viewport.reset()
        self.current_path = path
        self.modified = False

    def open_file(self, path: str) -> bool:
        lines = fileio.read_document(path)
        if lines is None:
            return False
        self.load_document(lines, path)
        return True

    def save(self) -> bool:
        """Save to the current path; False when there is none or writing failed."""
        if not self.current_path:
            return False
        if not fileio.write_document(self.current_path, self.buffer.lines):
            return False
        self.modified = False
        return True

    def save_as(self, path: str) -> bool:
        self.current_path = path
        return self.save()

    def new_file(self, path: str) -> bool:
        """Create an empty file at path and make it the open document."""
        if not fileio.create_empty(path):
            return False
        self.load_document([""], path)
        return True

    def rename(self, new_path: str) -> bool:
        """Move the current file on disk and follow it."""
        if not self.current_path:
            return False
        if not fileio.rename_path(self.current_path, new_path):
            return False
        self.current_path = new_path
        return True
