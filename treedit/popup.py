"""Single-line prompts shown in a box over the screen.

A :class:`Popup` only collects text. What the text means is decided by
:func:`resolve_popup`, which turns a submitted popup into a
:class:`PopupAction` for the editor to carry out.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent


class PopupKind(Enum):
    EXIT_PROMPT = "exit_prompt"
    NEW_FILE = "new_file"
    RENAME = "rename"
    SAVE_FILE = "save_file"
    SEARCH = "search"


TITLES = {
    PopupKind.EXIT_PROMPT: "Exit Options: (e)xit, (s)ave, (c)ancel",
    PopupKind.NEW_FILE: "New File: Enter file name",
    PopupKind.RENAME: "Rename/Move: Enter new name",
    PopupKind.SAVE_FILE: "Save As: Enter file name",
    PopupKind.SEARCH: "Search:",
}


class PromptOutcome(Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


@dataclass
class Popup:
    """An open prompt and the text typed into it so far."""
    kind: PopupKind
    text: str = ""

    @property
    def title(self) -> str:
        return TITLES[self.kind]

    def feed(self, key_event: 'KeyEvent') -> PromptOutcome:
        """Apply one key to the input line."""
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                self.text = ""
                return PromptOutcome.CANCELLED
            if key_event.value == 'enter':
                return PromptOutcome.SUBMITTED
            if key_event.value == 'backspace':
                self.text = self.text[:-1]
            return PromptOutcome.PENDING
        if key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if char and ord(char[0]) >= 32:
                self.text += char
        return PromptOutcome.PENDING


class ActionType(Enum):
    NONE = "none"
    QUIT = "quit"
    SAVE = "save"
    CANCEL = "cancel"
    NEW_FILE = "new_file"
    RENAME = "rename"
    SAVE_AS = "save_as"
    SEARCH = "search"


@dataclass(frozen=True)
class PopupAction:
    action: ActionType
    argument: str = ""


def resolve_popup(kind: PopupKind, text: str) -> PopupAction:
    """Decide what a submitted popup asks for.

    The exit prompt accepts 'e'/'exit' and 's'/'save' in any case; anything
    else cancels. Name prompts with a blank name do nothing. Search queries
    are used exactly as typed.
    """
    if kind == PopupKind.SEARCH:
        if not text:
            return PopupAction(ActionType.NONE)
        return PopupAction(ActionType.SEARCH, text)

    answer = text.strip()
    if kind == PopupKind.EXIT_PROMPT:
        choice = answer.lower()
        if choice in ('e', 'exit'):
            return PopupAction(ActionType.QUIT)
        if choice in ('s', 'save'):
            return PopupAction(ActionType.SAVE)
        return PopupAction(ActionType.CANCEL)

    if not answer:
        return PopupAction(ActionType.NONE)
    if kind == PopupKind.NEW_FILE:
        return PopupAction(ActionType.NEW_FILE, answer)
    if kind == PopupKind.RENAME:
        return PopupAction(ActionType.RENAME, answer)
    return PopupAction(ActionType.SAVE_AS, answer)
