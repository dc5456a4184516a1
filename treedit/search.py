"""Literal substring search with wrap-around."""

from typing import Optional, Sequence


def find(lines: Sequence[str], query: str, from_row: int) -> Optional[tuple[int, int]]:
    """Find the first occurrence of query at or after from_row, wrapping.

    Rows from_row..end are scanned first (each from column 0), then rows
    0..from_row-1. The search is case-sensitive.

    Returns:
        (row, col) of the match, or None when the query is empty or absent
    """
    if not query or not lines:
        return None
    from_row = max(0, min(from_row, len(lines) - 1))
    for row in list(range(from_row, len(lines))) + list(range(0, from_row)):
        col = lines[row].find(query)
        if col != -1:
            return row, col
    return None
