"""The emoji corpus and its keyword matcher.

The catalog comes from the ``emoji`` package.  Each entry gets a short id
(its first alias, e.g. ``grinning``), a readable name and a keyword list.
Search follows the usual picker semantics: every query word has to be a
prefix of one of the entry's words, and entries whose words match earlier
rank higher.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

import emoji
from loguru import logger

from ..models import EmojiEntry, IconItem, IconType

DEFAULT_LIMIT = 90

_WORD_SPLIT = re.compile(r"[-_\s]+")
_QUERY_SPLIT = re.compile(r"[\s,]+")
_SKIN_TONES = {chr(cp) for cp in range(0x1F3FB, 0x1F400)}


def utf16_length(text: str) -> int:
    """Length of *text* in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


class EmojiCorpus:
    """In-memory emoji catalog with id lookup and keyword search."""

    def __init__(self, entries: Iterable[EmojiEntry]) -> None:
        self.entries: list[EmojiEntry] = list(entries)
        self._ids = {e.id for e in self.entries}
        self._natives = {e.native for e in self.entries}
        self._search_text = [self._index_text(e) for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, emoji_id: object) -> bool:
        return emoji_id in self._ids

    @staticmethod
    def _index_text(entry: EmojiEntry) -> str:
        words: list[str] = []
        for source in (entry.id, entry.name, *entry.keywords):
            for word in _WORD_SPLIT.split(source.lower()):
                if word and word not in words:
                    words.append(word)
        return "," + ",".join(words)

    def is_emoji(self, value: str) -> bool:
        """Return ``True`` for a known emoji id or a short native emoji."""
        if not isinstance(value, str) or not value.strip():
            return False
        if value in self._ids:
            return True
        return utf16_length(value) <= 2 and value in self._natives

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[EmojiEntry]:
        """Return entries matching every word of *query*, best first."""
        words: list[str] = []
        for word in _QUERY_SPLIT.split(query.lower().replace("-", " ")):
            if word and word not in words:
                words.append(word)
        if not words:
            return []

        scored: list[tuple[int, int]] = []
        for pos, (entry, text) in enumerate(zip(self.entries, self._search_text)):
            total = 0
            for word in words:
                hit = text.find("," + word)
                if hit == -1:
                    break
                total += 0 if entry.id == word else hit + 1
            else:
                scored.append((total, pos))
        scored.sort()
        return [self.entries[pos] for _, pos in scored[:limit]]

    @classmethod
    def from_catalog(cls) -> EmojiCorpus:
        """Build the corpus from the ``emoji`` package's catalog."""
        fully_qualified = emoji.STATUS["fully_qualified"]
        entries: list[EmojiEntry] = []
        seen: set[str] = set()
        for native, meta in emoji.EMOJI_DATA.items():
            if meta.get("status") != fully_qualified:
                continue
            if any(ch in _SKIN_TONES for ch in native):
                continue
            name = meta.get("en", "").strip(":").replace("_", " ")
            aliases = [a.strip(":") for a in meta.get("alias", [])]
            emoji_id = (aliases[0] if aliases else name.replace(" ", "_")).lower()
            if not emoji_id or emoji_id in seen:
                continue
            seen.add(emoji_id)
            entries.append(
                EmojiEntry(
                    id=emoji_id,
                    name=name or emoji_id,
                    native=native,
                    keywords=tuple(aliases[1:]),
                )
            )
        logger.debug(f"Loaded {len(entries)} emoji entries")
        return cls(entries)


def emoji_item(entry: EmojiEntry) -> IconItem:
    """Map a catalog entry to a canonical emoji item."""
    return IconItem.build(IconType.EMOJI, entry.id, label=entry.name or entry.id)


@lru_cache(maxsize=1)
def get_emoji_corpus() -> EmojiCorpus:
    """Return the process-wide emoji corpus."""
    return EmojiCorpus.from_catalog()
