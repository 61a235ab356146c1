"""Convert every stored icon encoding into a canonical :class:`IconItem`.

Icons have been persisted in several shapes over time:

* a bare string, either an emoji id (``"grinning"``), a native emoji
  (``"😀"``) or a glyph name (``"arrow-up"``);
* a map with an older ``type`` vocabulary, e.g.
  ``{"type": "tabler-icon", "id": "arrow-up", "color": "#fb434c"}``;
* a map without any ``type`` at all;
* the canonical shape ``{"type", "id", "label", "data": {...}}``.

:func:`normalize` never raises.  Input it cannot interpret gives ``None``,
which callers treat as "no icon".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .colors import ColorTokens, avatar_defaults
from .models import IconItem, IconType, make_id
from .search.emoji_index import EmojiCorpus, get_emoji_corpus

# Older tag names still found in stored data.
TYPE_ALIASES: dict[str, IconType] = {
    "tabler-icon": IconType.ICON,
}

UNKNOWN = "unknown"


def parse_type(tag: Any) -> IconType | None:
    """Return the item type named by *tag*, honoring deprecated aliases."""
    if isinstance(tag, IconType):
        return tag
    if not isinstance(tag, str):
        return None
    name = tag.strip().lstrip(":").lower()
    if name in TYPE_ALIASES:
        return TYPE_ALIASES[name]
    try:
        return IconType(name)
    except ValueError:
        return None


def _text(value: Any) -> str | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _classify(value: str, emojis: EmojiCorpus) -> IconItem:
    # Best effort: a string is an emoji only if the emoji corpus knows it,
    # everything else is taken to be a glyph name.
    kind = IconType.EMOJI if emojis.is_emoji(value) else IconType.ICON
    return IconItem.build(kind, value)


def _from_canonical(raw: Mapping[str, Any]) -> IconItem | None:
    data = raw.get("data")
    kind = parse_type(raw.get("type"))
    if kind is None or not isinstance(data, Mapping):
        return None
    value = data.get("value")
    if not isinstance(value, str) or not value.strip():
        return None
    payload = dict(raw)
    payload["type"] = kind
    if payload.get("id") is None:
        payload["id"] = make_id(kind, value)
    if payload.get("label") is None:
        payload["label"] = value
    try:
        return IconItem.model_validate(payload)
    except ValidationError:
        return None


def _from_typed_map(
    kind: IconType, raw: Mapping[str, Any], value: str, tokens: ColorTokens | None
) -> IconItem:
    label = _text(raw.get("name")) or _text(raw.get("label")) or value
    color = _text(raw.get("color"))
    background = None
    if kind is IconType.AVATAR:
        default_bg, default_fg = avatar_defaults(tokens)
        background = _text(raw.get("backgroundColor")) or default_bg
        color = color or default_fg
    elif kind is not IconType.ICON:
        color = None
    return IconItem.build(kind, value, label=label, color=color, background_color=background)


def normalize(
    raw: Any,
    emojis: EmojiCorpus | None = None,
    tokens: ColorTokens | None = None,
) -> IconItem | None:
    """Return the canonical item for *raw*, or ``None`` if it is not an icon.

    Parameters
    ----------
    raw:
        Any supported encoding (see the module docstring).
    emojis:
        Corpus used to tell emoji ids from glyph names.  Defaults to the
        process-wide emoji corpus.
    tokens:
        Color-token lookup for default avatar colors.
    """
    if isinstance(raw, IconItem):
        return raw

    if isinstance(raw, str):
        if not raw.strip():
            return None
        return _classify(raw, emojis or get_emoji_corpus())

    if not isinstance(raw, Mapping):
        return None

    data = raw.get("data")
    if isinstance(data, Mapping):
        item = _from_canonical(raw)
        if item is not None:
            return item
        # A canonical map keeps its value under data; its id is not a value.
        value = _text(data.get("value"))
    else:
        value = _text(raw.get("value")) or _text(raw.get("id"))
    has_tag = raw.get("type") is not None
    kind = parse_type(raw.get("type"))

    if kind is not None and value is not None:
        return _from_typed_map(kind, raw, value, tokens)

    if value is not None:
        return _classify(value, emojis or get_emoji_corpus())

    if has_tag:
        # Keep unreadable tagged values visible instead of dropping them.
        label = _text(raw.get("name")) or _text(raw.get("label")) or UNKNOWN
        return IconItem.build(IconType.ICON, "", id=make_id(IconType.ICON, UNKNOWN), label=label)

    return None


def to_legacy(item: IconItem) -> dict[str, Any]:
    """Encode *item* in the pre-canonical map shape.

    This is the shape older clients persisted in the recently used list.
    """
    kind = "tabler-icon" if item.type is IconType.ICON else item.type.value
    raw: dict[str, Any] = {"type": kind, "id": item.data.value, "name": item.label}
    if item.data.color is not None:
        raw["color"] = item.data.color
    if item.data.backgroundColor is not None:
        raw["backgroundColor"] = item.data.backgroundColor
    return raw
