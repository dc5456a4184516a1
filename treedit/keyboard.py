"""Keyboard input handling using curtsies-style tokens."""

import re
from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.
    CTRL_SPECIAL = "ctrl_special"  # Ctrl + arrow keys, with or without Shift


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace', 'f2')
    raw: str  # The raw key string from the input source
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False
    code: Optional[int] = None


SPECIALS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert', 'escape',
} | {f'f{n}' for n in range(1, 13)}

# xterm modified cursor keys: ESC [ 1 ; <modifier> <final>
_CSI_MODIFIED = re.compile(r'^\x1b\[1;(\d+)([ABCDHF])$')
_CSI_FINALS = {'A': 'up', 'B': 'down', 'C': 'right', 'D': 'left', 'H': 'home', 'F': 'end'}

_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'esc': 'escape',
    'del': 'delete',
    'return': 'enter',
    'kp_enter': 'enter',
}


def _special_event(base: str, raw: str, alt: bool = False, ctrl: bool = False,
                   shift: bool = False) -> KeyEvent:
    """Build the event for a named key with the given modifiers."""
    if alt:
        key_type = KeyType.ALT
    elif ctrl:
        key_type = KeyType.CTRL_SPECIAL
    elif shift:
        key_type = KeyType.SHIFT_SPECIAL
    else:
        key_type = KeyType.SPECIAL
    return KeyEvent(key_type=key_type, value=base, raw=raw, is_alt=alt,
                    is_ctrl=ctrl, is_shift=shift, is_sequence=True)


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a key token into a KeyEvent.

        Args:
            key: curtsies key name ('<LEFT>', '<Ctrl-x>', '<Esc+LEFT>'),
                a raw xterm modified cursor sequence, or a plain character

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+LEFT>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            return self._parse_token(key_str)

        # Modified cursor keys curtsies did not name
        match = _CSI_MODIFIED.match(key_str)
        if match:
            bits = int(match.group(1)) - 1
            return _special_event(_CSI_FINALS[match.group(2)], key_str,
                                  alt=bool(bits & 2), ctrl=bool(bits & 4),
                                  shift=bool(bits & 1))

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                # Map Ctrl-J/Ctrl-M to enter, consistent with terminals
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                if ch == 'i':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
                if ch == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if o == 127:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)

        # Bare ESC
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        # ESC followed by one character is Alt+character
        if len(key_str) == 2 and key_str[0] == '\x1b':
            return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)

        # Regular character
        return KeyEvent(
            key_type=KeyType.REGULAR,
            value=key_str,
            raw=key_str,
            is_sequence=False
        )

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        normalized = name.replace('+', '-')
        parts = normalized.split('-')
        base = parts[-1]
        # A literal '-' key, as in '<Ctrl-->' or '<Esc+->'
        if base == '' and len(parts) > 1:
            parts = parts[:-1]
            base = '-'
        mods = {part.lower() for part in parts[:-1] if part}
        # Normalize meta/esc to alt
        alt = bool(mods & {'alt', 'meta', 'esc'})
        ctrl = 'ctrl' in mods
        shift = 'shift' in mods

        if len(base) != 1:
            base = base.lower()
            base = _ALIASES.get(base, base)

        # Map named whitespace tokens to regular characters
        if base in ('space', 'spacebar', 'spc'):
            base = ' '
        if base == 'tab' and not (alt or ctrl):
            if shift:
                return _special_event('tab', key_str, shift=True)
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')

        if len(base) == 1:
            if ctrl and not alt:
                lower = base.lower()
                # Map Ctrl-J / Ctrl-M to enter
                if lower in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=lower, raw=key_str, is_ctrl=True)
            if alt:
                return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str,
                                is_alt=True, is_ctrl=ctrl, is_shift=shift)
            return KeyEvent(key_type=KeyType.REGULAR, value=base, raw=base)

        if base == 'escape' and not mods:
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        # Named keys, including unknown tokens, keep their modifiers
        return _special_event(base, key_str, alt=alt, ctrl=ctrl, shift=shift)
