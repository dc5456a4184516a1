"""Screen composition.

Everything here is pure: given the editor state and a screen size, the
functions build a :class:`Frame` of styled rows. Front ends (the blessed
terminal and the Textual app) only translate the style names into their own
attributes and paint the rows.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from . import metrics
from .constants import EditorConstants

if TYPE_CHECKING:
    from .engine import EditingSession
    from .filetree import FileTree
    from .popup import Popup

# Style names understood by the renderers
PLAIN = ""
HEADER = "header"
STATUS = "status"
STATUS_TREE = "status_tree"
LINE_NUMBER = "line_number"
CURRENT_LINE_NUMBER = "current_line_number"
SELECTION = "selection"
SCROLLBAR = "scrollbar"
TREE = "tree"
TREE_SELECTED = "tree_selected"
POPUP = "popup"
HELP = "help"

SCROLLBAR_THUMB = "█"

HELP_TEXT = """=== Key Bindings Help ===

-- General --
F4 ....................... Toggle Help
Esc ...................... Show popup (exit/save/cancel)
F2 / F1 .................. FileTree / Editor mode

-- Editor Mode --
Arrow keys ............... Move cursor (with horizontal scrolling)
Shift + Arrow ............ Select region
Ctrl + Left/Right ........ Move by word
Alt + Left/Right ......... Jump with acceleration (doubling step)
Home / End ............... Line start / end
Ctrl + c / x / v ......... Copy / Cut / Paste
Ctrl + a ................. Select all
Ctrl + z / r ............. Undo / Redo
Ctrl + Up/Down ........... Scroll view
Ctrl + f ................. Search text
Ctrl + s ................. Save file

-- FileTree Mode --
Number key (1-9) ......... Open entry shown at that position
Up/Down .................. Navigate entries
Right / Enter ............ Enter directory or open file
Left ..................... Go up a directory
Del ...................... Delete entry
n ........................ New file (popup)
m ........................ Rename/Move current file (popup)
"""


@dataclass
class Segment:
    text: str
    style: str = PLAIN


@dataclass
class Frame:
    """Rows of styled segments plus the hardware cursor, if shown."""
    rows: list[list[Segment]] = field(default_factory=list)
    cursor: Optional[tuple[int, int]] = None

    def row_text(self, y: int) -> str:
        return "".join(segment.text for segment in self.rows[y])

    def text(self) -> str:
        return "\n".join(self.row_text(y) for y in range(len(self.rows)))


def _row_width(row: list[Segment]) -> int:
    return sum(metrics.display_width(segment.text) for segment in row)


def _pad(row: list[Segment], width: int, style: str = PLAIN) -> list[Segment]:
    missing = width - _row_width(row)
    if missing > 0:
        row.append(Segment(" " * missing, style))
    return row


def _styled_line(text: str, width: int, style: str) -> list[Segment]:
    return [Segment(metrics.fit(text, width), style)]


def scrollbar_thumb(total: int, visible: int, offset: int) -> Optional[int]:
    """Row of the scrollbar thumb, or None when everything fits."""
    if visible <= 0 or total <= visible:
        return None
    max_scroll = total - visible
    ratio = min(offset, max_scroll) / max_scroll
    return int(round(ratio * (visible - 1)))


def header_text(path: Optional[str], modified: bool = False) -> str:
    if path:
        name = os.path.basename(path) or path
        limit = EditorConstants.HEADER_PATH_LIMIT
        shown = path if len(path) <= limit else path[:limit] + "..."
        text = f"File: {name} | {shown}"
    else:
        text = EditorConstants.NEW_FILE_TITLE
    if modified:
        text += " [Modified]"
    return text


def status_text(session: "EditingSession", mode_name: str,
                message: Optional[str] = None) -> str:
    if message:
        return f" {message}"
    position = session.position
    line = session.buffer.line(position.row)
    column = metrics.grapheme_index(line, position.col) + 1
    return (f"[treedit] {mode_name} | lines: {session.buffer.line_count}  "
            f"Ln {position.row + 1}, Col {column}  {EditorConstants.STATUS_HINTS}")


def _row_selection(session: "EditingSession", row: int) -> Optional[tuple[int, int]]:
    bounds = session.selection_range()
    if bounds is None:
        return None
    start, end = bounds
    if not (start.row <= row <= end.row):
        return None
    line = session.buffer.line(row)
    sel_start = start.col if row == start.row else 0
    sel_end = end.col if row == end.row else len(line)
    return sel_start, sel_end


def render_text_row(line: str, left: int, width: int, tab_width: int,
                    selection: Optional[tuple[int, int]] = None) -> list[Segment]:
    """Visible part of one line, split into plain and selected segments."""
    segments: list[Segment] = []
    for offset, shown in metrics.visible_clusters(line, left, width, tab_width):
        selected = selection is not None and selection[0] <= offset < selection[1]
        style = SELECTION if selected else PLAIN
        if segments and segments[-1].style == style:
            segments[-1].text += shown
        else:
            segments.append(Segment(shown, style))
    return _pad(segments, width)


def compose_editor_pane(session: "EditingSession", width: int, height: int,
                        mode_name: str = "Editor", message: Optional[str] = None,
                        follow: bool = True) -> Frame:
    """Header, numbered text area with scrollbar, and status bar.

    With follow=False the viewport is used as is, so a preview never
    scrolls the document.
    """
    width = max(1, width)
    height = max(3, height)
    text_height = height - 2
    number_width = session.line_number_width()
    gutter = number_width + 1
    text_width = max(1, width - gutter - 1)
    viewport = session.viewport
    buffer = session.buffer
    position = session.position

    if follow:
        viewport.follow(buffer, position, text_height, text_width)

    frame = Frame()
    frame.rows.append(_styled_line(header_text(session.current_path, session.modified),
                                   width, HEADER))

    thumb = scrollbar_thumb(buffer.line_count, text_height, viewport.top)
    for y in range(text_height):
        row = viewport.top + y
        segments: list[Segment] = []
        if row < buffer.line_count:
            style = CURRENT_LINE_NUMBER if row == position.row else LINE_NUMBER
            segments.append(Segment(f"{row + 1:>{number_width}}", style))
            segments.append(Segment(" "))
            segments.extend(render_text_row(buffer.line(row), viewport.left, text_width,
                                            viewport.tab_width, _row_selection(session, row)))
        else:
            segments.append(Segment(" " * (gutter + text_width)))
        segments.append(Segment(SCROLLBAR_THUMB if y == thumb else " ", SCROLLBAR))
        frame.rows.append(_pad(segments, width))

    status_style = STATUS if mode_name == "Editor" else STATUS_TREE
    frame.rows.append(_styled_line(status_text(session, mode_name, message), width,
                                   status_style))

    if viewport.top <= position.row < viewport.top + text_height:
        x = metrics.display_width(buffer.line(position.row), position.col,
                                  viewport.tab_width) - viewport.left
        if 0 <= x < text_width:
            frame.cursor = (1 + position.row - viewport.top, gutter + x)
    return frame


def _wrap(text: str, width: int, rows: int) -> list[str]:
    """Hard-wrap text into at most rows pieces of width display columns."""
    pieces = []
    remaining = text
    for _ in range(rows):
        clusters = metrics.visible_clusters(remaining, 0, width)
        pieces.append("".join(part for _, part in clusters))
        if clusters:
            remaining = remaining[metrics.next_boundary(remaining, clusters[-1][0]):]
    return pieces


def compose_tree_pane(tree: "FileTree", width: int, height: int) -> Frame:
    """Path header, numbered entry list with scrollbar, and entry count."""
    width = max(2, width)
    height = max(4, height)
    list_height = height - 3
    list_width = width - 1
    tree.update_scroll(list_height)

    frame = Frame()
    for piece in _wrap(f"Path: {tree.current_path}", width, 2):
        frame.rows.append(_styled_line(piece, width, HEADER))

    thumb = scrollbar_thumb(len(tree.entries), list_height, tree.scroll_offset)
    for y in range(list_height):
        index = tree.scroll_offset + y
        if index < len(tree.entries):
            entry = tree.entries[index]
            label = f"{y + 1}: {entry.name}{os.sep if entry.is_dir else ''}"
            style = TREE_SELECTED if index == tree.selected else TREE
            segments = _styled_line(label, list_width, style)
        else:
            segments = _styled_line("", list_width, TREE)
        segments.append(Segment(SCROLLBAR_THUMB if y == thumb else " ", STATUS_TREE))
        frame.rows.append(segments)

    frame.rows.append(_styled_line(f"FileTree: {len(tree.entries)} entries", width,
                                   STATUS_TREE))
    return frame


def compose_file_tree_mode(session: "EditingSession", tree: "FileTree", width: int,
                           height: int, message: Optional[str] = None) -> Frame:
    """Read-only editor preview on the left, directory browser on the right."""
    tree_width = max(2, width * EditorConstants.TREE_PANE_PERCENT // 100)
    editor_width = max(1, width - tree_width)
    left = compose_editor_pane(session, editor_width, height, "FileTree", message,
                               follow=False)
    right = compose_tree_pane(tree, tree_width, height)
    frame = Frame()
    for y in range(max(len(left.rows), len(right.rows))):
        row = list(left.rows[y]) if y < len(left.rows) else [Segment(" " * editor_width)]
        row.extend(right.rows[y] if y < len(right.rows) else [])
        frame.rows.append(row)
    return frame


def compose_popup(popup: "Popup", width: int, height: int) -> Frame:
    """A three-row bordered box with the popup title and input line."""
    width = max(4, width)
    height = max(3, height)
    top = min(height - 3, height * 40 // 100)
    left = width * 20 // 100
    box_width = max(4, width - 2 * left)
    inner = box_width - 2

    title = metrics.fit(popup.title, inner).rstrip()
    text = popup.text
    # Keep the end of a long input visible
    while text and metrics.display_width(text) > inner - 1:
        text = text[metrics.next_boundary(text, 0):]

    frame = Frame()
    for y in range(height):
        if y == top:
            line = "┌" + title + "─" * (inner - metrics.display_width(title)) + "┐"
        elif y == top + 1:
            line = "│" + metrics.fit(text, inner) + "│"
        elif y == top + 2:
            line = "└" + "─" * inner + "┘"
        else:
            frame.rows.append([Segment(" " * width)])
            continue
        frame.rows.append(_pad([Segment(" " * left), Segment(line, POPUP)], width))
    frame.cursor = (top + 1, left + 1 + metrics.display_width(text))
    return frame


def compose_help(width: int, height: int, selecting: bool = False) -> Frame:
    lines = HELP_TEXT.splitlines()
    if selecting:
        lines += ["", "(Shift selection in progress)"]
    frame = Frame()
    for y in range(max(1, height)):
        line = lines[y] if y < len(lines) else ""
        frame.rows.append(_styled_line(line, max(1, width), HELP))
    return frame
