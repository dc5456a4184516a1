"""Command pattern implementation for editor-pane key bindings."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .popup import PopupKind

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Cursor movement that drops any selection."""

    extend = False

    def __init__(self, direction: str):
        self.direction = direction

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.session.move(self.direction, extend=self.extend or key_event.is_shift)
        return False


class SelectionMovementCommand(MovementCommand):
    """Shift+movement: keep the anchor and grow or shrink the selection."""

    extend = True


class PageCommand(EditorCommand):
    """Move the cursor a screenful up or down."""

    def __init__(self, direction: str):
        self.direction = direction

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        session = editor.session
        for _ in range(max(1, session.viewport.height - 1)):
            session.move(self.direction, extend=key_event.is_shift)
        return False


class ScrollCommand(EditorCommand):
    """Scroll the view by one row without moving the cursor."""

    def __init__(self, down: bool):
        self.down = down

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        if self.down:
            editor.session.scroll_down()
        else:
            editor.session.scroll_up()
        return False


class EditCommand(EditorCommand):
    """Base class for editing commands; the session records undo checkpoints."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit; return True if the document changed."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.delete_forward()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.insert_newline()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if not char or (ord(char[0]) < 32 and char != '\t'):
            return False
        return editor.session.insert_char(char)


class CutCommand(EditCommand):
    def _edit(self, editor, key_event):
        if editor.session.cut():
            editor.status_message = "Selection cut"
            return True
        editor.status_message = "No selection"
        return False


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.session.paste()


class SystemCommand(EditorCommand):
    """Base class for commands that do not change document content directly."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class CopyCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.session.copy():
            editor.status_message = "Selection copied"
        elif editor.session.selected_text():
            editor.status_message = "Clipboard unavailable"
        else:
            editor.status_message = "No selection"


class SelectAllCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.session.select_all()


class UndoCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.session.undo():
            editor.status_message = "Undone"
        else:
            editor.status_message = "Nothing to undo"


class RedoCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.session.redo():
            editor.status_message = "Redone"
        else:
            editor.status_message = "Nothing to redo"


class SearchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.open_popup(PopupKind.SEARCH)


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for key, direction in (('left', 'left'), ('right', 'right'), ('up', 'up'),
                               ('down', 'down'), ('home', 'home'), ('end', 'end_of_line')):
            self.register((KeyType.SPECIAL, key), MovementCommand(direction))
            # Selection movement commands (Shift+arrow)
            self.register((KeyType.SHIFT_SPECIAL, key), SelectionMovementCommand(direction))

        # Ctrl+Left/Right moves by word (Ctrl+Shift extends the selection)
        self.register((KeyType.CTRL_SPECIAL, 'left'), MovementCommand('word_left'))
        self.register((KeyType.CTRL_SPECIAL, 'right'), MovementCommand('word_right'))
        # Alt+Left/Right jumps with a doubling step
        self.register((KeyType.ALT, 'left'), MovementCommand('accel_left'))
        self.register((KeyType.ALT, 'right'), MovementCommand('accel_right'))

        # Ctrl+Up/Down scrolls the view
        self.register((KeyType.CTRL_SPECIAL, 'up'), ScrollCommand(down=False))
        self.register((KeyType.CTRL_SPECIAL, 'down'), ScrollCommand(down=True))

        # Paging (PageDown/PageUp)
        self.register((KeyType.SPECIAL, 'page_up'), PageCommand('up'))
        self.register((KeyType.SPECIAL, 'page_down'), PageCommand('down'))
        self.register((KeyType.SHIFT_SPECIAL, 'page_up'), PageCommand('up'))
        self.register((KeyType.SHIFT_SPECIAL, 'page_down'), PageCommand('down'))

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.CTRL, 'x'), CutCommand())
        self.register((KeyType.CTRL, 'c'), CopyCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())
        self.register((KeyType.CTRL, 'a'), SelectAllCommand())

        # Undo/redo
        self.register((KeyType.CTRL, 'z'), UndoCommand())
        self.register((KeyType.CTRL, 'r'), RedoCommand())
        self.register((KeyType.CTRL, 'y'), RedoCommand())

        # System commands
        self.register((KeyType.CTRL, 'f'), SearchCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        # Any key without Alt ends an accelerated run
        if not key_event.is_alt:
            editor.session.reset_accel()

        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
