"""Test the editor controller: key routing, modes and popups."""

import os

import pytest

from treedit.clipboard import MemoryClipboard
from treedit.editor import Editor, Mode
from treedit.keyboard import KeyEvent, KeyType
from treedit.popup import PopupKind
from treedit.settings import EditorSettings


def make_editor(start_dir, lines=None):
    editor = Editor(settings=EditorSettings(), clipboard=MemoryClipboard(),
                    start_dir=str(start_dir))
    if lines is not None:
        editor.session.load_document(lines)
    editor.running = True
    return editor


def key(value, key_type=KeyType.SPECIAL, **flags):
    return KeyEvent(key_type=key_type, value=value, raw=value, **flags)


def type_text(editor, text):
    for char in text:
        editor.handle_key_event(key(char, KeyType.REGULAR))


def test_typing_in_editor_mode(tmp_path):
    editor = make_editor(tmp_path)
    type_text(editor, "hi")
    editor.handle_key_event(key('enter'))
    type_text(editor, "x")
    assert editor.session.lines == ["hi", "x"]
    assert editor.modified


def test_escape_opens_exit_prompt_and_exit_quits(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('escape'))
    assert editor.popup.kind == PopupKind.EXIT_PROMPT
    type_text(editor, "e")
    editor.handle_key_event(key('enter'))
    assert editor.popup is None
    assert editor.running is False


def test_exit_prompt_cancel(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('escape'))
    type_text(editor, "c")
    editor.handle_key_event(key('enter'))
    assert editor.popup is None
    assert editor.running is True


def test_escape_inside_popup_closes_it(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('escape'))
    editor.handle_key_event(key('escape'))
    assert editor.popup is None
    assert editor.running is True


def test_save_without_path_prefills_default_name(tmp_path):
    editor = make_editor(tmp_path, ["data"])
    editor.handle_key_event(key('s', KeyType.CTRL, is_ctrl=True))
    assert editor.popup.kind == PopupKind.SAVE_FILE
    assert editor.popup.text == "output.txt"
    editor.handle_key_event(key('enter'))
    saved = tmp_path / "output.txt"
    assert saved.read_text() == "data"
    assert editor.session.current_path == str(saved)
    assert editor.status_message == f"Saved to {saved}"


def test_save_existing_file(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("old")
    editor = make_editor(tmp_path)
    assert editor.load_file(str(path))
    editor.handle_key_event(key('end'))
    type_text(editor, "er")
    editor.handle_key_event(key('s', KeyType.CTRL, is_ctrl=True))
    assert path.read_text() == "older"
    assert not editor.modified


def test_load_missing_file_starts_empty_document(tmp_path):
    editor = make_editor(tmp_path)
    path = tmp_path / "new.txt"
    assert editor.load_file(str(path))
    assert editor.session.lines == [""]
    assert editor.session.current_path == str(path)
    assert not path.exists()


def test_mode_switching_and_tree_letters(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    assert editor.mode == Mode.FILE_TREE
    type_text(editor, "n")
    assert editor.popup.kind == PopupKind.NEW_FILE
    editor.handle_key_event(key('escape'))
    editor.handle_key_event(key('f1'))
    assert editor.mode == Mode.EDITOR
    type_text(editor, "nm")
    assert editor.session.lines == ["nm"]


def test_new_file_popup_creates_in_browsed_directory(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    type_text(editor, "n")
    type_text(editor, "fresh.txt")
    editor.handle_key_event(key('enter'))
    path = tmp_path / "fresh.txt"
    assert path.exists()
    assert editor.session.current_path == str(path)
    assert editor.file_tree.selected_entry().name == "fresh.txt"


def test_rename_popup_moves_current_file(tmp_path):
    path = tmp_path / "before.txt"
    path.write_text("x")
    editor = make_editor(tmp_path)
    editor.load_file(str(path))
    editor.handle_key_event(key('f2'))
    type_text(editor, "m")
    assert editor.popup.kind == PopupKind.RENAME
    type_text(editor, "after.txt")
    editor.handle_key_event(key('enter'))
    assert (tmp_path / "after.txt").exists()
    assert not path.exists()
    assert editor.session.current_path == str(tmp_path / "after.txt")


def test_rename_without_file(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    type_text(editor, "m")
    assert editor.popup is None
    assert editor.status_message == "No file to rename"


def test_quick_open_by_digit(tmp_path):
    (tmp_path / "a.txt").write_text("alpha\nbeta")
    (tmp_path / "b.txt").write_text("bravo")
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    type_text(editor, "2")
    assert editor.mode == Mode.EDITOR
    assert editor.session.lines == ["bravo"]
    assert editor.session.current_path == str(tmp_path / "b.txt")


def test_tree_navigation_and_enter(tmp_path):
    (tmp_path / "dir").mkdir()
    (tmp_path / "dir" / "inside.txt").write_text("in")
    (tmp_path / "top.txt").write_text("top")
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    editor.handle_key_event(key('right'))
    assert editor.file_tree.current_path == str(tmp_path / "dir")
    editor.handle_key_event(key('left'))
    editor.handle_key_event(key('down'))
    editor.handle_key_event(key('enter'))
    assert editor.mode == Mode.EDITOR
    assert editor.session.lines == ["top"]


def test_tree_delete(tmp_path):
    (tmp_path / "gone.txt").write_text("x")
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    editor.handle_key_event(key('delete'))
    assert not (tmp_path / "gone.txt").exists()
    assert editor.status_message == "Deleted gone.txt"


def test_help_toggle_and_dismiss(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f4'))
    assert editor.help_visible
    editor.handle_key_event(key('f4'))
    assert not editor.help_visible
    editor.handle_key_event(key('f4'))
    type_text(editor, "x")
    assert not editor.help_visible
    assert editor.session.lines == [""]


def test_search_popup_moves_cursor(tmp_path):
    editor = make_editor(tmp_path, ["one", "two", "three"])
    editor.handle_key_event(key('f', KeyType.CTRL, is_ctrl=True))
    assert editor.popup.kind == PopupKind.SEARCH
    type_text(editor, "hre")
    editor.handle_key_event(key('enter'))
    assert editor.session.position.as_tuple() == (2, 1)


def test_search_not_found_message(tmp_path):
    editor = make_editor(tmp_path, ["one"])
    editor.handle_key_event(key('f', KeyType.CTRL, is_ctrl=True))
    type_text(editor, "zzz")
    editor.handle_key_event(key('enter'))
    assert editor.status_message == "Not found: zzz"


def test_synthetic_ctrl_c_copies(tmp_path):
    editor = make_editor(tmp_path, ["Test text"])
    editor.session.select_all()
    editor.handle_key_event(KeyEvent(key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True))
    assert editor.status_message == "Selection copied"
    assert editor.session.clipboard.text == "Test text"


def test_status_message_cleared_by_next_key(tmp_path):
    editor = make_editor(tmp_path, ["abc"])
    editor.handle_key_event(key('c', KeyType.CTRL, is_ctrl=True))
    assert editor.status_message == "No selection"
    editor.handle_key_event(key('right'))
    assert editor.status_message is None


def test_compose_editor_frame(tmp_path):
    editor = make_editor(tmp_path, ["hello"])
    frame = editor.compose(40, 6)
    assert len(frame.rows) == 6
    assert frame.row_text(0).startswith("New File")
    assert "Editor | lines: 1" in frame.row_text(5)
    assert frame.cursor == (1, 3)


def test_compose_file_tree_frame(tmp_path):
    (tmp_path / "a.txt").write_text("a")
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('f2'))
    frame = editor.compose(100, 10)
    assert "1: a.txt" in frame.text()
    assert "FileTree: 1 entries" in frame.row_text(9)
    assert frame.cursor is None


def test_compose_popup_frame(tmp_path):
    editor = make_editor(tmp_path)
    editor.handle_key_event(key('escape'))
    assert "Exit Options" in editor.compose(80, 20).text()
