"""Constants and configuration defaults for the treedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Cursor acceleration (Alt+Left/Right)
    ACCEL_BASE_STEP = 8  # Graphemes moved by the first accelerated move
    ACCEL_MAX_STEP = 1024  # Upper bound for the doubling step

    # Undo history
    UNDO_LIMIT = 500  # Oldest checkpoints are dropped beyond this depth

    # Text metrics
    TAB_WIDTH = 4  # Display columns occupied by a tab character

    # Fallback text area size used before the first render
    DEFAULT_VIEW_WIDTH = 80
    DEFAULT_VIEW_HEIGHT = 24

    # Layout
    MIN_LINE_NUMBER_WIDTH = 2
    HEADER_PATH_LIMIT = 30  # Characters of the full path shown in the header
    TREE_PANE_PERCENT = 30  # Width share of the directory browser pane
    QUICK_OPEN_KEYS = "123456789"

    # Smallest usable screen
    MIN_TERMINAL_WIDTH = 20
    MIN_TERMINAL_HEIGHT = 5
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small (minimum {}x{})"
    CURRENT_SIZE_MESSAGE = "Current size: {}x{}"

    # File operations
    DEFAULT_SAVE_NAME = "output.txt"  # Prefilled name in the Save As popup

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    COPY_PIPE_MARKER = b'C'  # Byte written to pipe when SIGINT arrives

    # Status messages
    STATUS_HINTS = "(Ctrl+S=Save, Esc=Popup, F4=Help, F2=FileTree, F1=Editor)"
    NEW_FILE_TITLE = "New File"
