"""Test the directory browser state."""

import os

import pytest

from treedit.filetree import FileTree


@pytest.fixture
def tree_dir(tmp_path):
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "inner.txt").write_text("inner")
    (tmp_path / ".hidden").write_text("h")
    return tmp_path


def names(tree):
    return [entry.name for entry in tree.entries]


def test_entries_sorted_by_path(tree_dir):
    tree = FileTree(str(tree_dir))
    assert names(tree) == [".hidden", "a.txt", "b.txt", "sub"]
    assert tree.selected == 0


def test_hidden_entries_can_be_skipped(tree_dir):
    tree = FileTree(str(tree_dir), show_hidden=False)
    assert names(tree) == ["a.txt", "b.txt", "sub"]


def test_move_up_and_down_stay_in_range(tree_dir):
    tree = FileTree(str(tree_dir), show_hidden=False)
    tree.move_up()
    assert tree.selected == 0
    for _ in range(10):
        tree.move_down()
    assert tree.selected == 2


def test_enter_directory_and_go_up(tree_dir):
    tree = FileTree(str(tree_dir), show_hidden=False)
    tree.selected = 2
    assert tree.enter() is None
    assert tree.current_path == str(tree_dir / "sub")
    assert names(tree) == ["inner.txt"]
    tree.go_up()
    assert tree.current_path == str(tree_dir)
    assert tree.selected == 0


def test_enter_file_returns_path(tree_dir):
    tree = FileTree(str(tree_dir), show_hidden=False)
    assert tree.enter() == str(tree_dir / "a.txt")


def test_enter_empty_directory(tmp_path):
    tree = FileTree(str(tmp_path))
    assert tree.entries == []
    assert tree.selected_entry() is None
    assert tree.enter() is None
    assert tree.delete_selected() is False


def test_delete_selected(tree_dir):
    tree = FileTree(str(tree_dir), show_hidden=False)
    tree.selected = 2
    assert tree.delete_selected() is True
    assert not (tree_dir / "sub").exists()
    assert names(tree) == ["a.txt", "b.txt"]


def test_select_visible_is_relative_to_scroll(tree_dir):
    tree = FileTree(str(tree_dir))
    tree.scroll_offset = 1
    assert tree.select_visible(2) is True
    assert tree.entries[tree.selected].name == "b.txt"
    assert tree.select_visible(9) is False


def test_update_scroll(tree_dir):
    tree = FileTree(str(tree_dir))
    tree.selected = 3
    tree.update_scroll(2)
    assert tree.scroll_offset == 2
    tree.selected = 0
    tree.update_scroll(2)
    assert tree.scroll_offset == 0


def test_reveal_selects_path(tree_dir):
    tree = FileTree(str(tree_dir))
    tree.reveal(str(tree_dir / "sub" / "inner.txt"))
    assert tree.current_path == str(tree_dir / "sub")
    assert tree.selected_entry().name == "inner.txt"


def test_unreadable_directory_lists_nothing(tmp_path):
    tree = FileTree(str(tmp_path / "missing"))
    assert tree.entries == []
