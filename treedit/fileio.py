"""File operations used by the editor and the directory browser.

Every function reports failure through its return value instead of raising,
so an unreadable file or a full disk never stops an editing session.
"""

import logging
import os
import shutil
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)


def read_document(path: str) -> Optional[list[str]]:
    """Read a UTF-8 text file and split it into lines.

    The text is split on '\\n' exactly, so writing the lines back with
    write_document reproduces the file byte for byte.

    Returns:
        The list of lines, or None if the file could not be read
    """
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None
    return content.split('\n')


def write_document(path: str, lines: list[str]) -> bool:
    """Write lines joined by '\\n' to path atomically.

    No trailing newline is appended.

    Returns:
        True if save succeeded, False otherwise
    """
    content = '\n'.join(lines)
    # Temporary file in the same directory so the rename stays on one filesystem
    dir_name = os.path.dirname(path) or '.'
    suffix = os.path.splitext(path)[1]
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                         dir=dir_name, suffix=suffix,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, path)
        return True
    except OSError as e:
        logger.warning("Cannot save %s: %s", path, e)
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                logger.debug("Could not remove temporary file %s", temp_filename)
        return False


def create_empty(path: str) -> bool:
    """Create an empty file, creating missing parent directories."""
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'w', encoding='utf-8'):
            pass
        return True
    except OSError as e:
        logger.warning("Cannot create %s: %s", path, e)
        return False


def rename_path(old: str, new: str) -> bool:
    """Move or rename a file."""
    try:
        os.rename(old, new)
        return True
    except OSError as e:
        logger.warning("Cannot rename %s to %s: %s", old, new, e)
        return False


def delete_path(path: str) -> bool:
    """Delete a file, or a directory with everything below it."""
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
        return True
    except OSError as e:
        logger.warning("Cannot delete %s: %s", path, e)
        return False
