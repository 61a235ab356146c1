"""Durable key-value storage used by the picker.

The picker only needs ``get``/``set`` on JSON-compatible values.  Hosts
normally pass their own store; :class:`JsonFileStore` keeps everything in
one JSON document and :class:`MemoryStore` is handy for tests.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from ..errors import StorageError
from .paths import STATE_FILE, atomic_write


class KeyValueStore(Protocol):
    """Synchronous, process-durable key-value storage."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """Dict-backed store; values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.reads: list[str] = []

    def get(self, key: str) -> Any | None:
        self.reads.append(key)
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)


class JsonFileStore:
    """Store every key in a single JSON object on disk.

    Parameters
    ----------
    path:
        Backing file, :data:`STATE_FILE` by default.
    strict:
        When ``True`` an unreadable file raises :class:`StorageError`
        instead of being treated as empty.
    """

    def __init__(self, path: Path | None = None, strict: bool = False) -> None:
        self.path = Path(path) if path is not None else STATE_FILE
        self.strict = strict
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            self._data = {}
            return
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            if self.strict:
                raise StorageError(f"Cannot read {self.path}: {exc}") from exc
            logger.warning(f"Ignoring unreadable picker state {self.path}: {exc}")
            loaded = {}
        if not isinstance(loaded, dict):
            if self.strict:
                raise StorageError(f"Expected a JSON object in {self.path}")
            logger.warning(f"Ignoring non-object picker state in {self.path}")
            loaded = {}
        self._data = loaded

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
        try:
            atomic_write(self.path, json.dumps(self._data, ensure_ascii=False, indent=2))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning(f"Failed to save picker state to {self.path}: {exc}")
