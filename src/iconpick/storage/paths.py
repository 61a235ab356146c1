"""File locations for iconpick's persisted state.

Directories come from platformdirs.  Nothing is created at import time;
:func:`ensure_parents` and :func:`atomic_write` create directories when a
file is actually written.
"""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "iconpick"

CONFIG_DIR = Path(user_config_dir(APP_NAME))

# Key-value store backing the recently used list and the color preset.
STATE_FILE = CONFIG_DIR / "picker_state.json"
SETTINGS_FILE = CONFIG_DIR / "settings.json"


def ensure_parents(path: Path) -> Path:
    """Create the parent directories of *path* and return *path*."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    return path


def atomic_write(path: Path, text: str) -> None:
    """Write *text* to *path* through a temporary file and ``os.replace``.

    Raises ``OSError`` when the data cannot be written; the temporary file
    is removed in that case.
    """
    tmp = path.with_suffix(path.suffix + ".tmp")
    ensure_parents(tmp)
    try:
        with tmp.open("w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp, path)
    except OSError:
        try:
            if tmp.exists():
                tmp.unlink()
        except OSError:
            pass
        raise
