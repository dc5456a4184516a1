"""Test the blessed renderer and the select-based main loop."""

import os
from unittest.mock import MagicMock, PropertyMock, patch

import blessed

from treedit.clipboard import MemoryClipboard
from treedit.editor import Editor
from treedit.keyboard import KeyEvent, KeyType
from treedit.settings import EditorSettings
from treedit.terminal import TerminalInterface
from treedit.view import Frame, Segment


def plain_terminal():
    # No styling: every capability renders as an empty string
    return TerminalInterface(blessed.Terminal(force_styling=None))


def test_update_frame_redraws_only_changed_rows(capsys):
    term = plain_terminal()
    term.update_frame(Frame(rows=[[Segment("one")], [Segment("two")]]))
    assert capsys.readouterr().out == "onetwo"

    term.update_frame(Frame(rows=[[Segment("one")], [Segment("TWO")]]))
    assert capsys.readouterr().out == "TWO"

    term.update_frame(Frame(rows=[[Segment("one")], [Segment("TWO")]]))
    assert capsys.readouterr().out == ""


def test_invalidate_frame_forces_full_repaint(capsys):
    term = plain_terminal()
    frame = Frame(rows=[[Segment("a")], [Segment("b")]])
    term.update_frame(frame)
    capsys.readouterr()
    term.invalidate_frame()
    term.update_frame(frame)
    assert capsys.readouterr().out == "ab"


def key(value, key_type=KeyType.SPECIAL):
    return KeyEvent(key_type=key_type, value=value, raw=value)


def test_resize_and_keys_drive_redraws(tmp_path):
    editor = Editor(settings=EditorSettings(), clipboard=MemoryClipboard(),
                    start_dir=str(tmp_path))
    calls = []

    def fake_select(readers, writers, errors):
        calls.append(readers)
        if len(calls) == 1:
            # Simulate SIGWINCH waking up the loop
            editor._handle_resize(None, None)
            return [editor._resize_pipe_r], [], []
        return [0], [], []

    quit_keys = [key('escape'), key('e', KeyType.REGULAR), key('enter')]

    with patch.object(editor.terminal, 'setup'), \
            patch.object(editor.terminal, 'cleanup'), \
            patch.object(type(editor.terminal), 'width', PropertyMock(return_value=80)), \
            patch.object(type(editor.terminal), 'height', PropertyMock(return_value=24)), \
            patch.object(editor.terminal.term, 'cbreak', MagicMock()), \
            patch.object(editor.keyboard, 'get_key_event', side_effect=quit_keys), \
            patch.object(editor, '_draw') as mock_draw, \
            patch('treedit.editor.select.select', side_effect=fake_select):
        editor.run()

    # Initial draw, the resize, then escape and 'e'; enter quits
    assert mock_draw.call_count == 4
    assert editor.running is False
    assert editor._resize_pipe_r is None


def test_small_terminal_shows_message():
    editor = Editor(settings=EditorSettings(), clipboard=MemoryClipboard())
    with patch.object(type(editor.terminal), 'width', PropertyMock(return_value=10)), \
            patch.object(type(editor.terminal), 'height', PropertyMock(return_value=3)), \
            patch.object(editor.terminal, 'draw_error_message') as mock_error:
        editor._draw()
    assert editor.error_mode is True
    mock_error.assert_called_once_with("Terminal too small (minimum 20x5)",
                                       "Current size: 10x3")
