"""Persisted picker state: key-value stores, recently used icons, presets."""

from iconpick.storage.kv import JsonFileStore, KeyValueStore, MemoryStore
from iconpick.storage.preset import COLOR_PRESET_KEY, load_color_preset, save_color_preset
from iconpick.storage.used_items import CURRENT_KEY, LEGACY_KEY, UsedItemsCache

__all__ = [
    "COLOR_PRESET_KEY",
    "CURRENT_KEY",
    "JsonFileStore",
    "KeyValueStore",
    "LEGACY_KEY",
    "MemoryStore",
    "UsedItemsCache",
    "load_color_preset",
    "save_color_preset",
]
