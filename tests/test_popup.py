"""Test popup text entry and resolution."""

import pytest

from treedit.keyboard import KeyEvent, KeyType
from treedit.popup import (ActionType, Popup, PopupAction, PopupKind, PromptOutcome,
                           resolve_popup)


def regular(char):
    return KeyEvent(key_type=KeyType.REGULAR, value=char, raw=char)


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=name)


def test_typing_and_backspace():
    popup = Popup(PopupKind.NEW_FILE)
    for char in "abc":
        assert popup.feed(regular(char)) == PromptOutcome.PENDING
    popup.feed(special('backspace'))
    assert popup.text == "ab"


def test_enter_submits():
    popup = Popup(PopupKind.SEARCH, "x")
    assert popup.feed(special('enter')) == PromptOutcome.SUBMITTED
    assert popup.text == "x"


def test_escape_cancels_and_clears():
    popup = Popup(PopupKind.RENAME, "name")
    assert popup.feed(special('escape')) == PromptOutcome.CANCELLED
    assert popup.text == ""


def test_control_keys_are_ignored():
    popup = Popup(PopupKind.SAVE_FILE, "out")
    popup.feed(KeyEvent(key_type=KeyType.CTRL, value='a', raw='\x01', is_ctrl=True))
    popup.feed(regular('\x07'))
    assert popup.text == "out"


def test_titles():
    assert Popup(PopupKind.EXIT_PROMPT).title == "Exit Options: (e)xit, (s)ave, (c)ancel"
    assert Popup(PopupKind.SAVE_FILE).title == "Save As: Enter file name"


@pytest.mark.parametrize("text,action", [
    ("e", ActionType.QUIT),
    ("EXIT", ActionType.QUIT),
    (" s ", ActionType.SAVE),
    ("save", ActionType.SAVE),
    ("c", ActionType.CANCEL),
    ("", ActionType.CANCEL),
    ("whatever", ActionType.CANCEL),
])
def test_exit_prompt(text, action):
    assert resolve_popup(PopupKind.EXIT_PROMPT, text).action == action


def test_name_prompts():
    assert resolve_popup(PopupKind.NEW_FILE, " a.txt ") == PopupAction(ActionType.NEW_FILE, "a.txt")
    assert resolve_popup(PopupKind.RENAME, "b.txt") == PopupAction(ActionType.RENAME, "b.txt")
    assert resolve_popup(PopupKind.SAVE_FILE, "c.txt") == PopupAction(ActionType.SAVE_AS, "c.txt")
    assert resolve_popup(PopupKind.NEW_FILE, "   ").action == ActionType.NONE


def test_search_query_is_kept_verbatim():
    assert resolve_popup(PopupKind.SEARCH, " two words ") == PopupAction(ActionType.SEARCH, " two words ")
    assert resolve_popup(PopupKind.SEARCH, "").action == ActionType.NONE
