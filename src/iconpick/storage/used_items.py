"""Recently used icons, most recent first.

The list lives under :data:`CURRENT_KEY` as canonical item dicts.  Older
clients stored raw icon values under :data:`LEGACY_KEY`; those are
normalized and copied over the first time the list is read.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from ..colors import ColorTokens
from ..models import IconItem
from ..normalize import normalize
from ..search.emoji_index import EmojiCorpus
from .kv import KeyValueStore

LEGACY_KEY = "ui/icons-used"
CURRENT_KEY = "ui/icons-used-v2"

MAX_RETAINED = 24


class UsedItemsCache:
    """Bounded, de-duplicated list of recently chosen icons."""

    def __init__(
        self,
        store: KeyValueStore,
        limit: int = MAX_RETAINED,
        emojis: EmojiCorpus | None = None,
        tokens: ColorTokens | None = None,
    ) -> None:
        self.store = store
        self.limit = limit
        self._emojis = emojis
        self._tokens = tokens

    def _normalize(self, raw: Any) -> IconItem | None:
        return normalize(raw, emojis=self._emojis, tokens=self._tokens)

    def _decode(self, raw_list: Any, key: str) -> list[IconItem]:
        if raw_list is None:
            return []
        if not isinstance(raw_list, list):
            logger.warning(f"Ignoring malformed used icons under {key!r}")
            return []
        items = []
        for raw in raw_list:
            item = self._normalize(raw)
            if item is None:
                logger.debug(f"Dropping unreadable used icon {raw!r}")
                continue
            items.append(item)
        return items

    def get(self) -> list[IconItem]:
        """Return the recently used items, migrating legacy data once."""
        items = self._decode(self.store.get(CURRENT_KEY), CURRENT_KEY)
        if items:
            return items
        migrated = self._decode(self.store.get(LEGACY_KEY), LEGACY_KEY)
        if migrated:
            self.store.set(CURRENT_KEY, [i.to_dict() for i in migrated])
            logger.info(f"Migrated {len(migrated)} recently used icons to {CURRENT_KEY!r}")
        return migrated

    def add(self, item: Any) -> None:
        """Move *item* to the front of the list and persist it."""
        new = self._normalize(item)
        if new is None:
            logger.debug(f"Not recording unreadable icon {item!r}")
            return
        updated = [new]
        seen = {new.id}
        for old in self.get()[: self.limit]:
            if old == new or old.id in seen:
                continue
            seen.add(old.id)
            updated.append(old)
        self.store.set(CURRENT_KEY, [i.to_dict() for i in updated])

    def clear(self) -> None:
        self.store.set(CURRENT_KEY, [])
