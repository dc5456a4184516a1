"""Main editor controller: modes, popups and the terminal event loop."""

import logging
import os
import sys
import select
import signal
import termios
from enum import Enum
from typing import Optional

from . import view
from .commands import CommandRegistry
from .constants import EditorConstants
from .engine import EditingSession
from .filetree import FileTree
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .popup import ActionType, Popup, PopupAction, PopupKind, PromptOutcome, resolve_popup
from .settings import EditorSettings, load_settings
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Mode(Enum):
    EDITOR = "Editor"
    FILE_TREE = "FileTree"


class Editor:
    """Editor application controller.

    Keys are routed in this order: an open popup gets every key; Esc, F4,
    F2 and F1 work in both modes; everything else goes to the editor
    command registry or the file tree handler depending on the mode.
    """

    def __init__(self, settings: Optional[EditorSettings] = None, terminal=None,
                 clipboard=None, start_dir: Optional[str] = None):
        """Initialize the editor components."""
        self.settings = settings or load_settings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.session = EditingSession(clipboard=clipboard, settings=self.settings)
        self.file_tree = FileTree(start_dir, show_hidden=self.settings.show_hidden)
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.mode = Mode.EDITOR
        self.popup: Optional[Popup] = None
        self.help_visible = False
        self.running = False
        self.error_mode = False  # True when the terminal is too small
        self.status_message: Optional[str] = None
        self._ctrl_c_pressed = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    @property
    def modified(self) -> bool:
        return self.session.modified

    # --- Files ---

    def _resolve(self, name: str) -> str:
        """Names typed into popups are relative to the browsed directory."""
        return os.path.join(self.file_tree.current_path, os.path.expanduser(name))

    def load_file(self, filename: str) -> bool:
        """Load a file into the editor; a missing file starts an empty document."""
        if not os.path.exists(filename):
            self.session.load_document([""], filename)
            return True
        if self.session.open_file(filename):
            logger.info("Opened %s", filename)
            return True
        self.status_message = f"Error: Cannot open {filename}"
        return False

    def handle_save(self) -> None:
        """Save to the current file, or ask for a name."""
        path = self.session.current_path
        if not path:
            self.open_popup(PopupKind.SAVE_FILE, self.settings.default_save_name)
            return
        if self.session.save():
            self.status_message = f"Saved to {path}"
            self.file_tree.refresh()
        else:
            self.status_message = f"Error: Cannot save to {path}"

    # --- Popups ---

    def open_popup(self, kind: PopupKind, text: str = "") -> None:
        self.popup = Popup(kind, text)

    def _handle_popup_key(self, key_event: KeyEvent) -> None:
        outcome = self.popup.feed(key_event)
        if outcome == PromptOutcome.CANCELLED:
            self.popup = None
        elif outcome == PromptOutcome.SUBMITTED:
            kind, text = self.popup.kind, self.popup.text
            self.popup = None
            self.apply_popup_action(resolve_popup(kind, text))

    def apply_popup_action(self, action: PopupAction) -> None:
        """Carry out what a submitted popup asked for."""
        if action.action == ActionType.QUIT:
            self.running = False
        elif action.action == ActionType.SAVE:
            self.handle_save()
        elif action.action == ActionType.SEARCH:
            if not self.session.search(action.argument):
                self.status_message = f"Not found: {action.argument}"
        elif action.action == ActionType.NEW_FILE:
            path = self._resolve(action.argument)
            if self.session.new_file(path):
                self.file_tree.reveal(path)
                self.status_message = f"Created {path}"
            else:
                self.status_message = f"Error: Cannot create {path}"
        elif action.action == ActionType.RENAME:
            path = self._resolve(action.argument)
            if self.session.rename(path):
                self.file_tree.reveal(path)
                self.status_message = f"Moved to {path}"
            else:
                self.status_message = f"Error: Cannot move to {path}"
        elif action.action == ActionType.SAVE_AS:
            path = self._resolve(action.argument)
            if self.session.save_as(path):
                self.file_tree.refresh()
                self.status_message = f"Saved to {path}"
            else:
                self.status_message = f"Error: Cannot save to {path}"

    # --- Keys ---

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.popup is not None:
            self._handle_popup_key(key_event)
            return

        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                self.open_popup(PopupKind.EXIT_PROMPT)
                return
            if key_event.value == 'f4':
                self.help_visible = not self.help_visible
                return
            if key_event.value == 'f2':
                self.mode = Mode.FILE_TREE
                return
            if key_event.value == 'f1':
                self.mode = Mode.EDITOR
                return

        # Any other key dismisses the help screen
        if self.help_visible:
            self.help_visible = False
            return

        if self.error_mode:
            return

        # Clear status message on any keypress
        self.status_message = None

        if self.mode == Mode.EDITOR:
            self.command_registry.execute(self, key_event)
        else:
            self._handle_tree_key(key_event)

    def _handle_tree_key(self, key_event: KeyEvent) -> None:
        tree = self.file_tree
        if key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if char in EditorConstants.QUICK_OPEN_KEYS:
                if tree.select_visible(int(char)):
                    self._open_tree_selection()
            elif char == 'n':
                self.open_popup(PopupKind.NEW_FILE)
            elif char == 'm':
                if self.session.current_path:
                    self.open_popup(PopupKind.RENAME)
                else:
                    self.status_message = "No file to rename"
        elif key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'up':
                tree.move_up()
            elif key_event.value == 'down':
                tree.move_down()
            elif key_event.value in ('right', 'enter'):
                self._open_tree_selection()
            elif key_event.value == 'left':
                tree.go_up()
            elif key_event.value == 'delete':
                self._delete_tree_selection()
        elif key_event.key_type == KeyType.CTRL and key_event.value == 's':
            self.handle_save()

    def _open_tree_selection(self) -> None:
        path = self.file_tree.enter()
        if path is None:
            return
        if self.session.open_file(path):
            self.mode = Mode.EDITOR
        else:
            self.status_message = f"Error: Cannot open {path}"

    def _delete_tree_selection(self) -> None:
        entry = self.file_tree.selected_entry()
        if entry is None:
            return
        if self.file_tree.delete_selected():
            self.status_message = f"Deleted {entry.name}"
        else:
            self.status_message = f"Error: Cannot delete {entry.name}"

    # --- Drawing ---

    def compose(self, width: int, height: int) -> view.Frame:
        """Build the frame for the current mode, popup or help screen."""
        if self.popup is not None:
            return view.compose_popup(self.popup, width, height)
        if self.help_visible:
            return view.compose_help(width, height, self.session.cursor.selecting)
        if self.mode == Mode.FILE_TREE:
            return view.compose_file_tree_mode(self.session, self.file_tree, width, height,
                                               self.status_message)
        return view.compose_editor_pane(self.session, width, height, Mode.EDITOR.value,
                                        self.status_message)

    def _draw(self):
        """Draw the current editor state to terminal."""
        width, height = self.terminal.width, self.terminal.height
        if (width < EditorConstants.MIN_TERMINAL_WIDTH
                or height < EditorConstants.MIN_TERMINAL_HEIGHT):
            self.error_mode = True
            self.terminal.draw_error_message(
                EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                    EditorConstants.MIN_TERMINAL_WIDTH, EditorConstants.MIN_TERMINAL_HEIGHT),
                EditorConstants.CURRENT_SIZE_MESSAGE.format(width, height))
            return
        self.error_mode = False
        self.terminal.update_frame(self.compose(width, height))

    # --- Event loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) - treat as copy command."""
        del signum, frame # Unused
        self._ctrl_c_pressed = True
        os.write(self._resize_pipe_w, EditorConstants.COPY_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        self._ctrl_c_pressed = False

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        try:
            with self.terminal.term.cbreak():
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    # Disable IXON/IXOFF so Ctrl-S and Ctrl-Q reach the editor
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    # Disable IEXTEN so Ctrl-V (VLNEXT) is not intercepted by the tty
                    new_settings[3] &= ~termios.IEXTEN
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError) as e:
                    logger.debug("Could not adjust terminal flags: %s", e)

                need_draw = True
                while self.running:
                    if need_draw:
                        self._draw()
                        need_draw = False

                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        if self._ctrl_c_pressed:
                            self._ctrl_c_pressed = False
                            # Synthetic Ctrl-C event for copy
                            self.handle_key_event(KeyEvent(
                                key_type=KeyType.CTRL,
                                value='c',
                                raw='\x03',
                                is_ctrl=True
                            ))
                        else:
                            self.terminal.invalidate_frame()
                        need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.handle_key_event(key_event)
                            need_draw = True

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError) as e:
                        logger.debug("Could not restore terminal flags: %s", e)
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()
