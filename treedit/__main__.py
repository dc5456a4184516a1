"""treedit CLI entry point.

Allows running via `python -m treedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .version import get_version_string

USAGE = "usage: treedit [--version] [--keytest] [--textual] [--log FILE] [FILE]"
LOG_ENV_VAR = "TREEDIT_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(path: Optional[str]) -> None:
    """Send treedit log records to a file; the screen is never used for logs."""
    if not path:
        return
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("treedit")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.")
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}",
                     f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                           ('shift', ev.is_shift), ('seq', ev.is_sequence)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts))
    finally:
        term.cleanup()


def parse_args(args: list[str]) -> dict:
    options = {"version": False, "keytest": False, "textual": False,
               "log": os.environ.get(LOG_ENV_VAR), "filename": None}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--version", "-V"):
            options["version"] = True
        elif arg in ("--keytest", "--keyboard-test"):
            options["keytest"] = True
        elif arg == "--textual":
            options["textual"] = True
        elif arg == "--log":
            if i + 1 >= len(args):
                raise ValueError("--log needs a file name")
            i += 1
            options["log"] = args[i]
        elif arg.startswith("-") and arg != "-":
            raise ValueError(f"unknown option: {arg}")
        elif options["filename"] is None:
            options["filename"] = arg
        else:
            raise ValueError("only one file can be opened")
        i += 1
    return options


def main() -> None:
    try:
        options = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"treedit: {e}\n{USAGE}", file=sys.stderr)
        sys.exit(2)

    if options["version"]:
        print(get_version_string())
        return
    configure_logging(options["log"])
    if options["keytest"]:
        run_keyboard_test()
        return
    if options["textual"]:
        from .textual_app import main as textual_main
        textual_main(options["filename"])
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if options["filename"]:
        editor.load_file(options["filename"])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
