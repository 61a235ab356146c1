"""User-tunable picker settings, stored as JSON in the config directory."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .storage.paths import SETTINGS_FILE, atomic_write


class PickerSettings(BaseModel):
    """Tuning knobs for search, listing and persistence."""

    model_config = ConfigDict(extra="ignore")

    debounce_ms: int = Field(200, ge=0)
    row_width: int = Field(9, ge=1)
    used_items_limit: int = Field(24, ge=1)
    glyph_limit: int = Field(100, ge=1)
    emoji_limit: int = Field(90, ge=1)
    all_tab_emoji_count: int = Field(32, ge=0)
    all_tab_icon_count: int = Field(48, ge=0)
    debug: bool = False

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @classmethod
    def load(cls, path: Path | None = None) -> PickerSettings:
        """Read settings from *path*; missing or broken files give defaults."""
        path = path or SETTINGS_FILE
        if not path.exists():
            return cls()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("settings must be a JSON object")
            return cls.model_validate(raw)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning(f"Using default settings, could not read {path}: {exc}")
            return cls()

    def save(self, path: Path | None = None) -> None:
        path = path or SETTINGS_FILE
        try:
            atomic_write(path, self.model_dump_json(indent=2))
        except OSError as exc:
            logger.warning(f"Failed to save settings to {path}: {exc}")
