"""The picker controller: query, tabs, listings, selection and keyboard.

A host UI owns the widgets and forwards input to :class:`PickerController`:
text edits go to :meth:`~PickerController.on_input`, key presses to
:meth:`~PickerController.handle_key`, clicks to
:meth:`~PickerController.choose`.  It re-renders from
:meth:`~PickerController.sections` whenever ``on_change`` fires.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from loguru import logger

from .colors import ColorTokens, avatar_defaults, default_tokens
from .config import PickerSettings
from .models import IconItem, IconType, SearchResult, Section, Tab
from .navigation import GridNavigator, normalize_key
from .normalize import normalize
from .search import SearchIndexRegistry
from .storage import (
    KeyValueStore,
    MemoryStore,
    UsedItemsCache,
    load_color_preset,
    save_color_preset,
)
from .text import derive_avatar_initials, derive_initials

ChosenCallback = Callable[[IconItem | None, bool], None]

# Tabs where no corpus is searched; their listing is built from the query.
_LOCAL_TABS = (Tab.TEXT, Tab.AVATAR)


class PickerController:
    """State and behavior of one open icon picker.

    Parameters
    ----------
    on_chosen:
        Called as ``on_chosen(item, keep_open)``; ``item`` is ``None`` when
        the user removed the icon.
    registry:
        Corpus search; the process-wide corpora by default.
    store:
        Durable key-value storage for the recently used list and the color
        preset.  An in-memory store is used when omitted.
    icon_value:
        The entity's current icon in any supported encoding.
    page_title:
        Title used to derive default initials on the text and avatar tabs.
    on_close, on_change:
        Called when the picker should close / when listed content changed.
    """

    def __init__(
        self,
        on_chosen: ChosenCallback | None = None,
        *,
        registry: SearchIndexRegistry | None = None,
        store: KeyValueStore | None = None,
        used_items: UsedItemsCache | None = None,
        settings: PickerSettings | None = None,
        tokens: ColorTokens | None = None,
        icon_value: Any = None,
        page_title: str | None = None,
        on_close: Callable[[], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings or PickerSettings()
        self.registry = registry or SearchIndexRegistry(
            glyph_limit=self.settings.glyph_limit,
            emoji_limit=self.settings.emoji_limit,
        )
        self.tokens = tokens or default_tokens
        self.store = store if store is not None else MemoryStore()
        self.used_items = used_items or UsedItemsCache(
            self.store,
            limit=self.settings.used_items_limit,
            emojis=self.registry.emojis,
            tokens=self.tokens,
        )
        self.on_chosen = on_chosen
        self.on_close = on_close
        self.on_change = on_change
        self.page_title = page_title
        self.icon_value = self.normalize(icon_value)

        self.tab = Tab.ALL
        self.query = ""
        self.input_text = ""
        self.result: SearchResult | None = None
        self.select_mode = False
        self.closed = False
        self.color = load_color_preset(self.store)
        self.navigator = GridNavigator(self.settings.row_width, on_activate=self.choose)

        self._generation = 0
        self._debounce: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    def normalize(self, raw: Any) -> IconItem | None:
        return normalize(raw, emojis=self.registry.emojis, tokens=self.tokens)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    @property
    def placeholder(self) -> str:
        return f"Search {self.tab.value} items"

    @property
    def shows_color_picker(self) -> bool:
        return self.tab in (Tab.ALL, Tab.ICON)

    # -- query --------------------------------------------------------------

    def on_input(self, text: str) -> None:
        """Record an edit of the query input; searching is debounced."""
        self.input_text = text
        self._cancel_debounce()
        loop = asyncio.get_running_loop()
        self._debounce = loop.call_later(self.settings.debounce_seconds, self._fire, text)

    def _cancel_debounce(self) -> None:
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

    def _fire(self, text: str) -> None:
        self._debounce = None
        task = asyncio.ensure_future(self.submit_query(text))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Icon search failed: {task.exception()}")

    async def flush(self) -> None:
        """Run a pending debounced search now and wait for all searches."""
        if self._debounce is not None:
            self._cancel_debounce()
            self._fire(self.input_text)
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def submit_query(self, text: str) -> SearchResult | None:
        """Search for *text* and store the hits unless a newer query won.

        Returns the applied result, or ``None`` when the query was blank,
        the tab needs no search, or the completion was stale.
        """
        self.query = text
        self.input_text = text
        self.select_mode = False
        self.navigator.reset()
        self._generation += 1
        generation = self._generation

        if not text.strip() or self.tab in _LOCAL_TABS:
            self.result = None
            self._changed()
            return None

        result = await self.registry.search(text, self.tab)
        if generation != self._generation:
            logger.debug(f"Dropping stale results for {text!r}")
            return None
        self.result = result
        self._changed()
        return result

    def reset_query(self) -> None:
        """Clear the query and results and return focus to the input."""
        self._cancel_debounce()
        self._generation += 1
        self.query = ""
        self.input_text = ""
        self.result = None
        self.select_mode = False
        self.navigator.reset()
        self._changed()

    def set_tab(self, tab: Tab | str) -> None:
        self.tab = Tab.parse(tab)
        self.reset_query()

    # -- listing ------------------------------------------------------------

    def sections(self) -> list[Section]:
        """The titled groups of items currently listed, top to bottom."""
        if self.result is not None:
            matched = self.result.merged()
            if not matched:
                return []
            return [Section(title=f"Matched ({len(matched)})", items=matched)]

        if self.tab is Tab.EMOJI:
            items = self.registry.all_emoji_items()
            return [Section(title=f"Emojis ({len(items)})", items=items)]
        if self.tab is Tab.ICON:
            items = self.registry.all_icon_items()
            return [Section(title=f"Icons ({len(items)})", items=items)]
        if self.tab is Tab.TEXT:
            item = self.text_item()
            return [Section(title="Text", items=[item])] if item else []
        if self.tab is Tab.AVATAR:
            item = self.avatar_item()
            return [Section(title="Avatar", items=[item])] if item else []

        sections = []
        used = self.used_items.get()
        if used:
            sections.append(Section(title="Frequently used", items=used))
        sections.append(
            Section(
                title=f"Emojis ({len(self.registry.emojis)})",
                items=self.registry.all_emoji_items(self.settings.all_tab_emoji_count),
            )
        )
        sections.append(
            Section(
                title=f"Icons ({len(self.registry.glyphs)})",
                items=self.registry.all_icon_items(self.settings.all_tab_icon_count),
            )
        )
        return sections

    @property
    def hint(self) -> str | None:
        """Message to show when the text or avatar tab has nothing to offer."""
        if self.tab is Tab.TEXT and self.text_item() is None:
            return "Enter text or use page initials"
        if self.tab is Tab.AVATAR and self.avatar_item() is None:
            return "Enter initials or use page initials"
        return None

    def text_item(self) -> IconItem | None:
        query = self.query.strip()
        value = query[:8] if query else derive_initials(self.page_title)
        return IconItem.build(IconType.TEXT, value) if value else None

    def avatar_item(self) -> IconItem | None:
        query = self.query.strip()
        value = query[:3] if query else derive_avatar_initials(self.page_title)
        if not value:
            return None
        background, color = avatar_defaults(self.tokens)
        return IconItem.build(IconType.AVATAR, value, color=color, background_color=background)

    # -- selection ----------------------------------------------------------

    def choose(self, raw: Any, keep_open: bool = False) -> IconItem | None:
        """Select *raw*, report it through ``on_chosen`` and remember it."""
        item = self.normalize(raw)
        if item is None:
            logger.debug(f"Ignoring selection of unreadable icon {raw!r}")
            return None
        chosen = item
        if item.type is IconType.ICON and self.color:
            chosen = item.with_color(self.color)
        elif item.type is IconType.AVATAR and not (item.data.color and item.data.backgroundColor):
            background, color = avatar_defaults(self.tokens)
            chosen = item.with_colors(
                item.data.color or color,
                item.data.backgroundColor or background,
            )
        if self.on_chosen is not None:
            self.on_chosen(chosen, keep_open)
        self.used_items.add(item)
        if not keep_open:
            self.close()
        elif self.select_mode:
            self._refresh_grid()
        return chosen

    def delete(self) -> None:
        """Remove the entity's icon."""
        if self.on_chosen is not None:
            self.on_chosen(None, False)
        self.close()

    def set_color(self, color: str | None) -> None:
        """Pick the preset color applied to chosen glyph icons.

        When the entity already shows a glyph icon, it is recolored right
        away and the picker stays open.
        """
        self.color = color.strip() if color and color.strip() else None
        save_color_preset(self.store, self.color)
        if self.icon_value is not None and self.icon_value.type is IconType.ICON:
            self.icon_value = self.icon_value.with_color(self.color)
            if self.on_chosen is not None:
                self.on_chosen(self.icon_value, True)

    def close(self) -> None:
        if self.closed:
            return
        self._cancel_debounce()
        self.closed = True
        self.navigator.reset()
        if self.on_close is not None:
            self.on_close()

    # -- keyboard -----------------------------------------------------------

    def enter_grid(self) -> IconItem | None:
        """Move focus from the input to the first listed item."""
        first = self.navigator.rebuild(self.sections())
        self.select_mode = first is not None
        return first

    def _refresh_grid(self) -> None:
        # The listing changed under the grid; keep focus near where it was.
        index = self.navigator.index
        self.navigator.rebuild(self.sections())
        if index >= 0 and self.navigator.slots:
            self.navigator.focus(min(index, len(self.navigator.slots) - 1), -1)
        self.select_mode = not self.navigator.idle

    def handle_key(self, key: str) -> bool:
        """Handle a key press inside the picker; ``True`` if consumed."""
        name = normalize_key(key)
        if name == "escape":
            if self.input_text.strip() or self.query.strip():
                self.reset_query()
            else:
                self.close()
            return True

        if not self.select_mode:
            if name in ("tab", "down"):
                self.enter_grid()
                return True
            return name == "up"

        consumed = self.navigator.handle_key(name)
        if self.navigator.idle:
            self.select_mode = False
        return consumed
