"""User configuration loaded from an OS-appropriate config directory.

The editor only reads ``settings.json``; it never writes it. Missing files,
malformed JSON and values of the wrong type fall back to the built-in
defaults from :class:`~treedit.constants.EditorConstants`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


@dataclass
class EditorSettings:
    accel_base_step: int = EditorConstants.ACCEL_BASE_STEP
    accel_max_step: int = EditorConstants.ACCEL_MAX_STEP
    undo_limit: int = EditorConstants.UNDO_LIMIT
    tab_width: int = EditorConstants.TAB_WIDTH
    show_hidden: bool = True
    use_system_clipboard: bool = True
    default_save_name: str = EditorConstants.DEFAULT_SAVE_NAME


def config_dir() -> Path:
    """Directory holding the settings file."""
    return Path(platformdirs.user_config_dir("treedit"))


def settings_path() -> Path:
    return config_dir() / SETTINGS_FILENAME


def _read_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return {}
    return data


def _validated(key: str, value: Any, default: Any) -> Any:
    # bool is a subclass of int; keep them apart
    if isinstance(default, bool):
        ok = isinstance(value, bool)
    elif isinstance(default, int):
        ok = isinstance(value, int) and not isinstance(value, bool) and value >= 0
    else:
        ok = isinstance(value, type(default))
    if not ok:
        logger.warning(f"Ignoring invalid value for setting {key!r}: {value!r}")
        return default
    return value


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings, falling back to defaults for anything missing or invalid."""
    raw = _read_raw(path or settings_path())
    defaults = EditorSettings()
    values = {}
    for field in fields(EditorSettings):
        default = getattr(defaults, field.name)
        if field.name in raw:
            values[field.name] = _validated(field.name, raw[field.name], default)
    unknown = set(raw) - {field.name for field in fields(EditorSettings)}
    if unknown:
        logger.info(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
    settings = EditorSettings(**values)
    if settings.accel_base_step < 1:
        settings.accel_base_step = EditorConstants.ACCEL_BASE_STEP
    if settings.accel_max_step < settings.accel_base_step:
        settings.accel_max_step = settings.accel_base_step
    return settings
