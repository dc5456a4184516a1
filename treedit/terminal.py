"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from . import view
from .view import Frame, Segment

# Background shared by the header, the tree pane and popups
PANEL_RGB = (33, 40, 48)
HEADER_RGB = (222, 165, 132)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._styles: Optional[dict[str, str]] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()
            self._curtsies_active = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    # Exit raw mode context
                    self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def invalidate_frame(self) -> None:
        """Forget the last painted frame so the next update repaints everything."""
        self._last_lines = None

    def _style_table(self) -> dict[str, str]:
        if self._styles is None:
            term = self.term
            panel = term.on_color_rgb(*PANEL_RGB)
            self._styles = {
                view.PLAIN: '',
                view.HEADER: term.color_rgb(*HEADER_RGB) + panel,
                view.STATUS: '',
                view.STATUS_TREE: term.bright_blue + panel,
                view.LINE_NUMBER: '',
                view.CURRENT_LINE_NUMBER: term.black_on_white,
                view.SELECTION: term.reverse,
                view.SCROLLBAR: '',
                view.TREE: term.white + panel,
                view.TREE_SELECTED: term.black_on_white,
                view.POPUP: term.white + panel,
                view.HELP: term.bold,
            }
        return self._styles

    def _compose_display_line(self, segments: list[Segment]) -> str:
        """Turn styled segments into one line of terminal output."""
        styles = self._style_table()
        out = []
        for segment in segments:
            attrs = styles.get(segment.style, '')
            if attrs:
                out.append(attrs + segment.text + self.term.normal)
            else:
                out.append(segment.text)
        return ''.join(out)

    def update_frame(self, frame: Frame) -> None:
        """Diff against last frame and write only changed rows.

        Falls back to a full clear on first paint or when the row count changes.
        """
        if self._last_lines is None or len(self._last_lines) != len(frame.rows):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in range(len(frame.rows))]

        for y, segments in enumerate(frame.rows):
            new_disp = self._compose_display_line(segments)
            if new_disp != self._last_lines[y]:
                print(self.term.move(y, 0) + new_disp, end='')
                self._last_lines[y] = new_disp

        if frame.cursor is None:
            print(self.term.hide_cursor, end='', flush=True)
        else:
            cursor_y, cursor_x = frame.cursor
            print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.clear, end='')
        center_y = self.term.height // 2
        for offset, message in enumerate((message1, message2)):
            if message:
                x = max(0, (self.term.width - len(message)) // 2)
                print(self.term.move(center_y - 1 + offset, x) + message, end='')
        print(self.term.hide_cursor, end='', flush=True)
        self.invalidate_frame()

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None when nothing arrived in time
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
