"""Grapheme-cluster aware text metrics.

Columns throughout treedit are offsets into a Python ``str`` that always
land on a grapheme-cluster boundary. These helpers convert between column
offsets, cluster indices and terminal display columns.
"""

from __future__ import annotations

from typing import Optional

import grapheme
from wcwidth import wcswidth

from .constants import EditorConstants

WHITESPACE_CLUSTERS = (" ", "\t")


def graphemes(text: str) -> list[str]:
    """Split text into grapheme clusters."""
    return list(grapheme.graphemes(text))


def boundaries(text: str) -> list[int]:
    """Return every cluster boundary offset, including 0 and len(text)."""
    offsets = [0]
    pos = 0
    for g in grapheme.graphemes(text):
        pos += len(g)
        offsets.append(pos)
    return offsets


def cluster_width(g: str, tab_width: int = EditorConstants.TAB_WIDTH) -> int:
    """Display columns occupied by a single grapheme cluster."""
    if g == "\t":
        return tab_width
    width = wcswidth(g)
    # Control characters report -1; they occupy no cell.
    return width if width > 0 else 0


def display_width(text: str, upto: Optional[int] = None,
                  tab_width: int = EditorConstants.TAB_WIDTH) -> int:
    """Display width of ``text[:upto]`` (the whole string when upto is None)."""
    if upto is not None:
        text = text[:max(0, upto)]
    return sum(cluster_width(g, tab_width) for g in grapheme.graphemes(text))


def snap_to_boundary(text: str, col: int) -> int:
    """Clamp col into the string and round it down to a cluster boundary."""
    col = max(0, min(col, len(text)))
    snapped = 0
    for offset in boundaries(text):
        if offset > col:
            break
        snapped = offset
    return snapped


def prev_boundary(text: str, col: int) -> int:
    """Offset of the cluster boundary before col (0 at the line start)."""
    col = snap_to_boundary(text, col)
    previous = 0
    for offset in boundaries(text):
        if offset >= col:
            break
        previous = offset
    return previous


def next_boundary(text: str, col: int) -> int:
    """Offset of the cluster boundary after col (len(text) at the line end)."""
    col = snap_to_boundary(text, col)
    for offset in boundaries(text):
        if offset > col:
            return offset
    return len(text)


def grapheme_index(text: str, col: int) -> int:
    """Number of whole clusters before col."""
    col = snap_to_boundary(text, col)
    return boundaries(text).index(col)


def offset_of(text: str, index: int) -> int:
    """Column offset of the cluster with the given index."""
    offsets = boundaries(text)
    index = max(0, min(index, len(offsets) - 1))
    return offsets[index]


def visible_clusters(text: str, left: int, width: int,
                     tab_width: int = EditorConstants.TAB_WIDTH) -> list[tuple[int, str]]:
    """Clusters shown in the display window [left, left + width).

    Returns (column offset, display text) pairs in order. Tabs are expanded
    to spaces. A wide cluster straddling ``left`` is shown as padding (with
    its own offset) and a cluster that would overflow the right edge ends
    the window.
    """
    x = 0
    pos = 0
    used = 0
    out: list[tuple[int, str]] = []
    for g in grapheme.graphemes(text):
        w = cluster_width(g, tab_width)
        if x + w <= left:
            x += w
            pos += len(g)
            continue
        if x < left:
            pad = min(x + w - left, width)
            out.append((pos, " " * pad))
            used += pad
        else:
            if used + w > width:
                break
            out.append((pos, " " * w if g == "\t" else g))
            used += w
        x += w
        pos += len(g)
    return out


def fit(text: str, width: int) -> str:
    """Truncate or pad text to exactly width display columns."""
    shown = "".join(part for _, part in visible_clusters(text, 0, width))
    return shown + " " * max(0, width - display_width(shown))
