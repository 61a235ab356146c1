"""Pydantic v2 models for picker items, search results and sections."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..errors import UnknownTabError


class IconType(str, Enum):
    """The four kinds of visual identifier an entity can carry."""

    EMOJI = "emoji"
    ICON = "icon"
    TEXT = "text"
    AVATAR = "avatar"


class Tab(str, Enum):
    """Picker tabs; every tab except ``ALL`` is pinned to one item type."""

    ALL = "all"
    EMOJI = "emoji"
    ICON = "icon"
    TEXT = "text"
    AVATAR = "avatar"

    @classmethod
    def parse(cls, value: str | Tab | None) -> Tab:
        """Return the tab named by *value*; ``None`` means ``ALL``."""
        if value is None:
            return cls.ALL
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownTabError(f"Unknown picker tab: {value!r}") from None


class IconData(BaseModel):
    """Payload of an icon item.

    ``color`` and ``backgroundColor`` are only meaningful for ``icon`` and
    ``avatar`` items.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    color: str | None = None
    backgroundColor: str | None = None


class IconItem(BaseModel):
    """Canonical icon representation used for listing and persistence."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: IconType
    id: str
    label: str
    data: IconData

    @classmethod
    def build(
        cls,
        type: IconType,
        value: str,
        *,
        id: str | None = None,
        label: str | None = None,
        color: str | None = None,
        background_color: str | None = None,
    ) -> IconItem:
        """Create an item, deriving ``id`` and ``label`` from *value*."""
        return cls(
            type=type,
            id=id if id is not None else make_id(type, value),
            label=label if label is not None else value,
            data=IconData(value=value, color=color, backgroundColor=background_color),
        )

    @property
    def value(self) -> str:
        return self.data.value

    def with_color(self, color: str | None) -> IconItem:
        """Return a copy whose ``data.color`` is *color*."""
        return self.model_copy(update={"data": self.data.model_copy(update={"color": color})})

    def with_colors(self, color: str | None, background_color: str | None) -> IconItem:
        data = self.data.model_copy(update={"color": color, "backgroundColor": background_color})
        return self.model_copy(update={"data": data})

    def to_dict(self) -> dict:
        """Return a JSON-ready dict without unset color fields."""
        return self.model_dump(mode="json", exclude_none=True)


def make_id(type: IconType | str, value: str) -> str:
    """Return the deterministic ``"<type>-<value>"`` id."""
    prefix = type.value if isinstance(type, IconType) else str(type)
    return f"{prefix}-{value}"


class EmojiEntry(BaseModel):
    """One record of the emoji catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    native: str
    keywords: tuple[str, ...] = ()


class SearchResult(BaseModel):
    """Per-source hits for one query, each list ordered best-first."""

    icons: list[IconItem] = Field(default_factory=list)
    emojis: list[IconItem] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.icons and not self.emojis

    def merged(self) -> list[IconItem]:
        """Emoji hits followed by glyph hits."""
        return [*self.emojis, *self.icons]


class Section(BaseModel):
    """A titled group of listed items, laid out in rows."""

    title: str
    items: list[IconItem] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)
