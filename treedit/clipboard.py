"""System clipboard integration."""

import logging
from typing import Optional

import pyperclip

logger = logging.getLogger(__name__)


class SystemClipboard:
    """Plain-text bridge to the system clipboard.

    Failures to reach the clipboard (no copy/paste mechanism installed, no
    display, ...) are logged and reported as a falsy result; they never
    propagate to the caller.
    """

    def set(self, text: str) -> bool:
        """Copy text to the system clipboard.

        Returns:
            True if the clipboard accepted the text
        """
        try:
            pyperclip.copy(text)
            return True
        except (pyperclip.PyperclipException, OSError) as e:
            logger.debug("Clipboard copy failed: %s", e)
            return False

    def get(self) -> Optional[str]:
        """Read the system clipboard.

        Returns:
            The clipboard text, or None if the clipboard is unreachable
        """
        try:
            content = pyperclip.paste()
        except (pyperclip.PyperclipException, OSError) as e:
            logger.debug("Clipboard paste failed: %s", e)
            return None
        return content if isinstance(content, str) else None


class MemoryClipboard:
    """In-process clipboard used when the system clipboard is unwanted."""

    def __init__(self, text: str = ""):
        self.text = text

    def set(self, text: str) -> bool:
        self.text = text
        return True

    def get(self) -> Optional[str]:
        return self.text
