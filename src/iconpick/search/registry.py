"""Dispatch a query to the glyph and emoji corpora and merge the hits."""

from __future__ import annotations

import asyncio

from loguru import logger

from ..models import IconItem, SearchResult, Tab
from . import emoji_index, glyphs
from .emoji_index import EmojiCorpus, emoji_item
from .glyphs import GlyphCorpus, glyph_item

# Which sources a tab draws from: (glyphs, emojis).
_TAB_SOURCES: dict[Tab, tuple[bool, bool]] = {
    Tab.ALL: (True, True),
    Tab.ICON: (True, False),
    Tab.EMOJI: (False, True),
    Tab.TEXT: (False, False),
    Tab.AVATAR: (False, False),
}


class SearchIndexRegistry:
    """Query both corpora for the active tab.

    Parameters
    ----------
    glyph_corpus, emoji_corpus:
        Corpora to search.  When omitted the process-wide corpora are used;
        the glyph corpus is then only built on the first search that needs
        it.
    glyph_limit, emoji_limit:
        Maximum hits kept per source.
    """

    def __init__(
        self,
        glyph_corpus: GlyphCorpus | None = None,
        emoji_corpus: EmojiCorpus | None = None,
        glyph_limit: int = glyphs.DEFAULT_LIMIT,
        emoji_limit: int = emoji_index.DEFAULT_LIMIT,
    ) -> None:
        self._glyph_corpus = glyph_corpus
        self._emoji_corpus = emoji_corpus
        self.glyph_limit = glyph_limit
        self.emoji_limit = emoji_limit

    @property
    def glyphs(self) -> GlyphCorpus:
        if self._glyph_corpus is None:
            self._glyph_corpus = glyphs.get_glyph_corpus()
        return self._glyph_corpus

    @property
    def emojis(self) -> EmojiCorpus:
        if self._emoji_corpus is None:
            self._emoji_corpus = emoji_index.get_emoji_corpus()
        return self._emoji_corpus

    async def search_icons(self, query: str) -> list[IconItem]:
        await asyncio.sleep(0)
        return [glyph_item(name) for name in self.glyphs.search(query, self.glyph_limit)]

    async def search_emojis(self, query: str) -> list[IconItem]:
        await asyncio.sleep(0)
        return [emoji_item(entry) for entry in self.emojis.search(query, self.emoji_limit)]

    async def search(self, query: str, tab: Tab | str | None = Tab.ALL) -> SearchResult:
        """Return glyph and emoji hits for *query*.

        Sources the tab does not show are not queried.  A source that fails
        contributes an empty list.
        """
        tab = Tab.parse(tab)
        want_icons, want_emojis = _TAB_SOURCES[tab]
        names: list[str] = []
        jobs = []
        if want_icons:
            names.append("icons")
            jobs.append(self.search_icons(query))
        if want_emojis:
            names.append("emojis")
            jobs.append(self.search_emojis(query))

        outcomes = await asyncio.gather(*jobs, return_exceptions=True)
        lists: dict[str, list[IconItem]] = {}
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.warning(f"{name} search failed for {query!r}: {outcome}")
                lists[name] = []
            else:
                lists[name] = outcome
        return SearchResult(**lists)

    # -- listings for an empty query ---------------------------------------

    def all_emoji_items(self, limit: int | None = None) -> list[IconItem]:
        entries = self.emojis.entries if limit is None else self.emojis.entries[:limit]
        return [emoji_item(e) for e in entries]

    def all_icon_items(self, limit: int | None = None) -> list[IconItem]:
        names = self.glyphs.names if limit is None else self.glyphs.names[:limit]
        return [glyph_item(n) for n in names]
