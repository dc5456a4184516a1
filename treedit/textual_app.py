"""Textual front end driving the same Editor controller."""

from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Static

from . import metrics, view
from .editor import Editor
from .keyboard import KeyboardHandler, KeyEvent

RICH_STYLES = {
    view.PLAIN: "",
    view.HEADER: "rgb(222,165,132) on rgb(33,40,48)",
    view.STATUS: "",
    view.STATUS_TREE: "bright_blue on rgb(33,40,48)",
    view.LINE_NUMBER: "",
    view.CURRENT_LINE_NUMBER: "black on white",
    view.SELECTION: "reverse",
    view.SCROLLBAR: "",
    view.TREE: "white on rgb(33,40,48)",
    view.TREE_SELECTED: "black on white",
    view.POPUP: "white on rgb(33,40,48)",
    view.HELP: "bold",
}

# Textual key names that differ from curtsies ones
_NAMED = {
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
}


def key_event_from_textual(key: str, character: Optional[str] = None,
                           parser: Optional[KeyboardHandler] = None) -> KeyEvent:
    """Translate a Textual key name ('ctrl+shift+left', 'a', 'f2') into a KeyEvent."""
    parser = parser or KeyboardHandler(None)
    parts = key.split('+')
    base = parts[-1]
    mods = [part for part in parts[:-1] if part]
    if not mods and character and character.isprintable() and len(character) == 1:
        return parser.parse_key(character)
    if base == 'space':
        base = ' '
    elif len(base) > 1:
        base = _NAMED.get(base, base.upper())
    names = [{'ctrl': 'Ctrl', 'shift': 'Shift', 'alt': 'Alt', 'meta': 'Alt'}.get(m, m)
             for m in mods]
    return parser.parse_key('<' + '-'.join(names + [base]) + '>')


def frame_to_text(frame: view.Frame) -> Text:
    """Render a frame as rich Text, marking the cursor cell in reverse."""
    text = Text(no_wrap=True, overflow="crop")
    for y, row in enumerate(frame.rows):
        if y:
            text.append("\n")
        line_start = len(text.plain)
        for segment in row:
            text.append(segment.text, style=RICH_STYLES.get(segment.style, ""))
        if frame.cursor is not None and frame.cursor[0] == y:
            index = _index_at_column(frame.row_text(y), frame.cursor[1])
            text.stylize("reverse", line_start + index, line_start + index + 1)
    return text


def _index_at_column(line: str, column: int) -> int:
    offset = 0
    width = 0
    for g in metrics.graphemes(line):
        if width >= column:
            break
        width += metrics.cluster_width(g)
        offset += len(g)
    return offset


class TreeditApp(App, inherit_bindings=False):
    """Full-screen Textual app showing the composed editor frames.

    Every key, Ctrl-C and Ctrl-Q included, goes to the editor.
    """

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #screen {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, filename=None, editor: Optional[Editor] = None):
        super().__init__()
        self.filename = filename
        self.editor = editor or Editor()
        self._parser = KeyboardHandler(None)

    def compose(self) -> ComposeResult:
        yield Static(id="screen")

    def on_mount(self) -> None:
        if self.filename:
            self.editor.load_file(self.filename)
        self.editor.running = True
        self.refresh_screen()

    def on_resize(self, event) -> None:
        self.refresh_screen()

    def on_key(self, event) -> None:
        event.stop()
        event.prevent_default()
        self.editor.handle_key_event(
            key_event_from_textual(event.key, event.character, self._parser))
        if not self.editor.running:
            self.exit()
            return
        self.refresh_screen()

    def refresh_screen(self) -> None:
        frame = self.editor.compose(self.size.width, self.size.height)
        self.query_one("#screen", Static).update(frame_to_text(frame))


def main(filename=None):
    """Run the Textual app."""
    app = TreeditApp(filename=filename)
    app.run()
