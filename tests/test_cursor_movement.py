"""Test cursor movement on the cursor model."""

import pytest
from treedit.buffer import TextBuffer
from treedit.model import CursorModel, CursorPosition


def create_cursor(lines, row=0, col=0):
    cursor = CursorModel(TextBuffer(lines))
    cursor.goto(row, col)
    return cursor


def test_left_wraps_to_previous_line_end():
    cursor = create_cursor(["abc", "de"], 1, 0)
    cursor.left()
    assert cursor.position == CursorPosition(0, 3)


def test_right_wraps_to_next_line_start():
    cursor = create_cursor(["abc", "de"], 0, 3)
    cursor.right()
    assert cursor.position == CursorPosition(1, 0)


def test_right_stops_at_document_end():
    cursor = create_cursor(["ab"], 0, 2)
    cursor.right()
    assert cursor.position == CursorPosition(0, 2)


def test_right_steps_over_whole_cluster():
    cursor = create_cursor(["e\u0301x"])
    cursor.right()
    assert cursor.col == 2


def test_vertical_move_clamps_column():
    cursor = create_cursor(["abcdef", "ab"], 0, 5)
    cursor.down()
    assert cursor.position == CursorPosition(1, 2)
    cursor.up()
    assert cursor.position == CursorPosition(0, 2)


def test_home_and_end():
    cursor = create_cursor(["hello"], 0, 2)
    cursor.end_of_line()
    assert cursor.col == 5
    cursor.home()
    assert cursor.col == 0


def test_word_right_skips_word_and_whitespace():
    cursor = create_cursor(["foo bar  baz"])
    cursor.word_right()
    assert cursor.col == 4
    cursor.word_right()
    assert cursor.col == 9
    cursor.word_right()
    assert cursor.col == 12


def test_word_right_wraps_at_line_end():
    cursor = create_cursor(["foo", "bar"], 0, 3)
    cursor.word_right()
    assert cursor.position == CursorPosition(1, 0)


def test_word_left_stops_on_whitespace():
    cursor = create_cursor(["foo bar  baz"], 0, 7)
    cursor.word_left()
    assert cursor.col == 3
    cursor.word_left()
    assert cursor.col == 0


def test_word_left_wraps_at_line_start():
    cursor = create_cursor(["foo", "bar"], 1, 0)
    cursor.word_left()
    assert cursor.position == CursorPosition(0, 3)


def test_accelerated_moves_double_the_step():
    cursor = create_cursor(["x" * 100])
    cursor.accel_right()
    assert cursor.col == 8
    cursor.accel_right()
    assert cursor.col == 24
    assert cursor.accel_step == 32
    cursor.reset_accel()
    cursor.accel_left()
    assert cursor.col == 16


def test_accelerated_step_is_capped():
    cursor = CursorModel(TextBuffer(["x" * 10]), accel_base_step=2, accel_max_step=4)
    for _ in range(5):
        cursor.accel_right()
    assert cursor.accel_step == 4
    assert cursor.col == 10


@pytest.mark.parametrize("row,col,expected", [
    (0, 99, (0, 3)),
    (9, 0, (1, 0)),
    (-3, -3, (0, 0)),
])
def test_goto_clamps(row, col, expected):
    cursor = create_cursor(["abc", "d"])
    cursor.goto(row, col)
    assert cursor.position.as_tuple() == expected
