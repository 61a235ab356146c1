"""Re-export the picker data models for convenient access."""

from iconpick.models.icon import (
    EmojiEntry,
    IconData,
    IconItem,
    IconType,
    SearchResult,
    Section,
    Tab,
    make_id,
)

__all__ = [
    "EmojiEntry",
    "IconData",
    "IconItem",
    "IconType",
    "SearchResult",
    "Section",
    "Tab",
    "make_id",
]
