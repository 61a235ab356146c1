"""Glyph and emoji corpora and the registry that searches them."""

from iconpick.search.emoji_index import EmojiCorpus, emoji_item, get_emoji_corpus
from iconpick.search.glyphs import (
    GlyphCorpus,
    get_glyph_corpus,
    glyph_item,
    glyph_name,
    set_glyph_identifiers,
)
from iconpick.search.registry import SearchIndexRegistry

__all__ = [
    "EmojiCorpus",
    "GlyphCorpus",
    "SearchIndexRegistry",
    "emoji_item",
    "get_emoji_corpus",
    "get_glyph_corpus",
    "glyph_item",
    "glyph_name",
    "set_glyph_identifiers",
]
