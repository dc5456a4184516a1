from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


@dataclass
class Snapshot:
    lines: list[str]


class UndoManager:
    """Two stacks of whole-buffer snapshots.

    ``checkpoint`` is called with the buffer state from *before* an edit.
    Undo and redo swap the current state with the top of the opposite stack.
    """

    def __init__(self, max_entries: int = EditorConstants.UNDO_LIMIT):
        self._undo_stack: list[Snapshot] = []
        self._redo_stack: list[Snapshot] = []
        self._max_entries = max_entries

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()

    def checkpoint(self, lines: list[str]):
        self._undo_stack.append(Snapshot(list(lines)))
        # Cap history (0 disables the cap)
        if self._max_entries and len(self._undo_stack) > self._max_entries:
            self._undo_stack.pop(0)
        # Any new edit invalidates redo history
        self._redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def depth(self) -> int:
        return len(self._undo_stack)

    def undo(self, current: list[str]) -> Optional[list[str]]:
        """Return the state to restore, or None when there is nothing to undo."""
        if not self.can_undo():
            return None
        entry = self._undo_stack.pop()
        self._redo_stack.append(Snapshot(list(current)))
        return list(entry.lines)

    def redo(self, current: list[str]) -> Optional[list[str]]:
        if not self.can_redo():
            return None
        entry = self._redo_stack.pop()
        self._undo_stack.append(Snapshot(list(current)))
        return list(entry.lines)
