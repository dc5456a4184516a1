"""Directory browser state for the file tree pane."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from . import fileio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: str
    is_dir: bool


class FileTree:
    """Listing of one directory with a selected entry and a scroll offset.

    Entries are sorted by full path. ``selected`` indexes into ``entries``
    and ``scroll_offset`` is the first entry shown in the list pane.
    """

    def __init__(self, path: Optional[str] = None, show_hidden: bool = True):
        self.current_path = os.path.abspath(path or os.getcwd())
        self.show_hidden = show_hidden
        self.entries: list[FileEntry] = []
        self.selected = 0
        self.scroll_offset = 0
        self.refresh()

    def refresh(self) -> None:
        """Re-read the current directory and reset selection and scroll."""
        entries = []
        try:
            with os.scandir(self.current_path) as it:
                for dir_entry in it:
                    if not self.show_hidden and dir_entry.name.startswith('.'):
                        continue
                    try:
                        is_dir = dir_entry.is_dir()
                    except OSError:
                        is_dir = False
                    entries.append(FileEntry(dir_entry.name, dir_entry.path, is_dir))
        except OSError as e:
            logger.warning("Cannot list %s: %s", self.current_path, e)
        entries.sort(key=lambda entry: entry.path)
        self.entries = entries
        self.selected = 0
        self.scroll_offset = 0

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def move_down(self) -> None:
        if self.selected + 1 < len(self.entries):
            self.selected += 1

    def selected_entry(self) -> Optional[FileEntry]:
        if not self.entries:
            return None
        return self.entries[self.selected]

    def enter(self) -> Optional[str]:
        """Descend into the selected directory, or return the selected file's path."""
        entry = self.selected_entry()
        if entry is None:
            return None
        if entry.is_dir:
            self.current_path = entry.path
            self.refresh()
            return None
        return entry.path

    def go_up(self) -> None:
        parent = os.path.dirname(self.current_path)
        if parent and parent != self.current_path:
            self.current_path = parent
            self.refresh()

    def delete_selected(self) -> bool:
        """Delete the selected entry (recursively for directories)."""
        entry = self.selected_entry()
        if entry is None:
            return False
        removed = fileio.delete_path(entry.path)
        self.refresh()
        return removed

    def select_path(self, path: str) -> bool:
        target = os.path.abspath(path)
        for index, entry in enumerate(self.entries):
            if os.path.abspath(entry.path) == target:
                self.selected = index
                return True
        return False

    def reveal(self, path: str) -> None:
        """Show the directory containing path with path selected."""
        parent = os.path.dirname(os.path.abspath(path))
        if parent != self.current_path:
            self.current_path = parent
        self.refresh()
        self.select_path(path)

    def select_visible(self, number: int) -> bool:
        """Select the entry shown at 1-based position number in the list pane."""
        target = self.scroll_offset + number - 1
        if number < 1 or target >= len(self.entries):
            return False
        self.selected = target
        return True

    def update_scroll(self, visible: int) -> None:
        """Scroll just far enough that the selection is inside visible rows."""
        visible = max(1, visible)
        if self.selected < self.scroll_offset:
            self.scroll_offset = self.selected
        elif self.selected >= self.scroll_offset + visible:
            self.scroll_offset = self.selected - visible + 1
