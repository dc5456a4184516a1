"""Test the line buffer."""

from treedit.buffer import TextBuffer
from treedit.model import CursorPosition


def test_buffer_is_never_empty():
    assert TextBuffer().lines == [""]
    assert TextBuffer([]).lines == [""]
    buffer = TextBuffer(["a"])
    buffer.replace_all([])
    assert buffer.lines == [""]


def test_clamp_snaps_to_cluster_boundary():
    buffer = TextBuffer(["e\u0301x", "y"])
    assert buffer.clamp(0, 1) == (0, 0)
    assert buffer.clamp(5, 5) == (1, 1)
    assert buffer.clamp(-1, -1) == (0, 0)


def test_insert_returns_position_after_text():
    buffer = TextBuffer(["held"])
    assert buffer.insert(0, 3, "l") == (0, 4)
    assert buffer.lines == ["helld"]


def test_insert_newline_splits_line():
    buffer = TextBuffer(["hello world"])
    assert buffer.insert_newline(0, 5) == (1, 0)
    assert buffer.lines == ["hello", " world"]


def test_delete_backward_at_document_start():
    buffer = TextBuffer(["abc"])
    assert buffer.delete_backward(0, 0) is None
    assert buffer.lines == ["abc"]


def test_delete_backward_removes_one_code_point():
    buffer = TextBuffer(["ae\u0301"])
    assert buffer.delete_backward(0, 3) == (0, 2)
    assert buffer.lines == ["ae"]


def test_delete_backward_snaps_to_cluster_boundary():
    # JP flag then a lone K indicator; removing P pairs J with K
    buffer = TextBuffer(["\U0001f1ef\U0001f1f5\U0001f1f0"])
    assert buffer.delete_backward(0, 2) == (0, 0)
    assert buffer.lines == ["\U0001f1ef\U0001f1f0"]


def test_insert_before_combining_mark_moves_past_cluster():
    buffer = TextBuffer(["\u0301"])
    assert buffer.insert(0, 0, "e") == (0, 2)
    assert buffer.insert(0, 2, "x") == (0, 3)
    assert buffer.lines == ["e\u0301x"]


def test_insert_regional_indicator_pair():
    buffer = TextBuffer(["\U0001f1f5"])
    assert buffer.insert(0, 0, "\U0001f1ef") == (0, 2)
    assert buffer.lines == ["\U0001f1ef\U0001f1f5"]


def test_delete_backward_joins_lines():
    buffer = TextBuffer(["ab", "cd"])
    assert buffer.delete_backward(1, 0) == (0, 2)
    assert buffer.lines == ["abcd"]


def test_delete_forward():
    buffer = TextBuffer(["ab", "cd"])
    assert buffer.delete_forward(0, 0) is True
    assert buffer.lines == ["b", "cd"]
    assert buffer.delete_forward(0, 1) is True
    assert buffer.lines == ["bcd"]
    assert buffer.delete_forward(0, 3) is False


def test_delete_range_across_lines():
    buffer = TextBuffer(["hello", "big", "world"])
    end = CursorPosition(2, 2)
    start = CursorPosition(0, 3)
    assert buffer.delete_range(end, start) == (0, 3)
    assert buffer.lines == ["helrld"]


def test_text_range():
    buffer = TextBuffer(["ab", "", "xyz"])
    assert buffer.text_range((0, 1), (2, 2)) == "b\n\nxy"
    assert buffer.text_range((2, 0), (2, 3)) == "xyz"
    assert buffer.text == "ab\n\nxyz"
