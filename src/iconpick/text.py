"""Helpers for the text and avatar tabs."""

from __future__ import annotations

from .models import IconItem, IconType

TEXT_MAX_CHARS = 8
AVATAR_MAX_CHARS = 3


def _initials(title: str | None, single_word_chars: int, limit: int) -> str | None:
    if title is None:
        return None
    words = title.split()
    if not words:
        return None
    if len(words) > 1:
        initials = words[0][:1] + words[1][:1]
    else:
        initials = words[0][:single_word_chars]
    return initials[:limit]


def derive_initials(title: str | None) -> str | None:
    """Initials for a text icon: first letters of two words, or two chars."""
    return _initials(title, 2, TEXT_MAX_CHARS)


def derive_avatar_initials(title: str | None) -> str | None:
    """Initials for an avatar: first letters of two words, or three chars."""
    return _initials(title, 3, AVATAR_MAX_CHARS)


def display_text(item: IconItem) -> str:
    """Text shown inside a text or avatar cell."""
    value = item.data.value
    if item.type is IconType.TEXT:
        return value[:TEXT_MAX_CHARS]
    if item.type is IconType.AVATAR:
        return value[:AVATAR_MAX_CHARS]
    return value
