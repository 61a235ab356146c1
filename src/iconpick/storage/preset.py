"""Persistence of the last chosen icon color preset."""

from __future__ import annotations

from .kv import KeyValueStore

COLOR_PRESET_KEY = "ui/icon-color-preset"


def load_color_preset(store: KeyValueStore) -> str | None:
    """Return the saved preset color, or ``None`` when unset or blank."""
    value = store.get(COLOR_PRESET_KEY)
    if isinstance(value, str) and value.strip() and value != "inherit":
        return value
    return None


def save_color_preset(store: KeyValueStore, color: str | None) -> None:
    """Save *color*; ``None`` or blank clears the preset."""
    store.set(COLOR_PRESET_KEY, color.strip() if color and color.strip() else "")
