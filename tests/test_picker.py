"""Tests for the picker controller."""
import asyncio
from unittest.mock import MagicMock

import pytest

from iconpick.config import PickerSettings
from iconpick.models import IconItem, IconType, Tab
from iconpick.picker import PickerController
from iconpick.search import SearchIndexRegistry
from iconpick.storage import COLOR_PRESET_KEY, MemoryStore


class CountingRegistry(SearchIndexRegistry):
    """Registry that records queries and can hold one query back."""

    def __init__(self, *args, hold=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.queries = []
        self.hold = hold
        self.gate = None

    async def search(self, query, tab=Tab.ALL):
        self.queries.append(query)
        if query == self.hold:
            await self.gate.wait()
        return await super().search(query, tab)


@pytest.fixture
def counting(glyphs, emojis):
    return CountingRegistry(glyph_corpus=glyphs, emoji_corpus=emojis)


@pytest.fixture
def on_chosen():
    return MagicMock()


@pytest.fixture
def picker(counting, store, settings, on_chosen):
    return PickerController(on_chosen, registry=counting, store=store, settings=settings)


# =========================================================================
# Query and results
# =========================================================================


class TestQuery:
    def test_search_shows_matched_section(self, picker):
        result = asyncio.run(picker.submit_query("heart"))
        assert result is picker.result
        sections = picker.sections()
        assert len(sections) == 1
        assert sections[0].title == "Matched (2)"
        assert [i.id for i in sections[0].items] == ["emoji-heart", "icon-Heart"]

    def test_no_matches_lists_nothing(self, picker):
        asyncio.run(picker.submit_query("zzzzqqqq"))
        assert picker.sections() == []

    def test_blank_query_restores_default_listing(self, picker):
        asyncio.run(picker.submit_query("heart"))
        asyncio.run(picker.submit_query("   "))
        assert picker.result is None
        assert [s.title for s in picker.sections()] == ["Emojis (5)", "Icons (7)"]

    def test_tab_limits_sources(self, picker):
        picker.set_tab("icon")
        asyncio.run(picker.submit_query("heart"))
        assert [i.id for i in picker.sections()[0].items] == ["icon-Heart"]

    def test_debounce_issues_one_search(self, picker, counting):
        async def scenario():
            picker.on_input("h")
            picker.on_input("he")
            picker.on_input("heart")
            await picker.flush()

        asyncio.run(scenario())
        assert counting.queries == ["heart"]
        assert picker.query == "heart"

    def test_debounce_timer_fires(self, counting, store, on_chosen):
        picker = PickerController(
            on_chosen, registry=counting, store=store, settings=PickerSettings(debounce_ms=5)
        )

        async def scenario():
            picker.on_input("rocket")
            await asyncio.sleep(0.05)
            await picker.flush()

        asyncio.run(scenario())
        assert counting.queries == ["rocket"]
        assert picker.result is not None

    def test_stale_result_is_dropped(self, glyphs, emojis, store, settings):
        registry = CountingRegistry(glyph_corpus=glyphs, emoji_corpus=emojis, hold="arrow")
        picker = PickerController(registry=registry, store=store, settings=settings)

        async def scenario():
            registry.gate = asyncio.Event()
            slow = asyncio.ensure_future(picker.submit_query("arrow"))
            await asyncio.sleep(0)
            fresh = await picker.submit_query("rocket")
            registry.gate.set()
            stale = await slow
            return fresh, stale

        fresh, stale = asyncio.run(scenario())
        assert stale is None
        assert picker.result == fresh
        assert picker.query == "rocket"
        assert [i.id for i in picker.result.merged()] == ["emoji-rocket"]

    def test_tab_switch_resets_query(self, picker):
        asyncio.run(picker.submit_query("heart"))
        picker.set_tab(Tab.EMOJI)
        assert picker.query == ""
        assert picker.result is None
        assert picker.placeholder == "Search emoji items"
        assert picker.sections()[0].title == "Emojis (5)"

    def test_icon_tab_lists_whole_corpus(self, picker):
        picker.set_tab("icon")
        assert picker.sections()[0].title == "Icons (7)"
        assert picker.shows_color_picker


# =========================================================================
# Default listings
# =========================================================================


class TestListings:
    def test_all_tab_starts_with_used_items(self, picker):
        picker.choose("rocket", keep_open=True)
        sections = picker.sections()
        assert sections[0].title == "Frequently used"
        assert sections[0].items[0].id == "emoji-rocket"

    def test_all_tab_slices_corpora(self, counting, store, on_chosen):
        settings = PickerSettings(debounce_ms=0, all_tab_emoji_count=2, all_tab_icon_count=3)
        picker = PickerController(on_chosen, registry=counting, store=store, settings=settings)
        emojis, icons = picker.sections()
        assert emojis.title == "Emojis (5)"
        assert len(emojis.items) == 2
        assert icons.title == "Icons (7)"
        assert len(icons.items) == 3

    def test_text_tab_uses_page_initials(self, counting, store, settings):
        picker = PickerController(registry=counting, store=store, settings=settings, page_title="Project Plan")
        picker.set_tab("text")
        (section,) = picker.sections()
        assert section.title == "Text"
        assert section.items[0] == IconItem.build(IconType.TEXT, "PP")
        assert not picker.shows_color_picker

    def test_text_tab_uses_query_without_searching(self, picker, counting):
        picker.set_tab("text")
        assert asyncio.run(picker.submit_query("Meeting notes")) is None
        assert counting.queries == []
        assert picker.sections()[0].items[0].data.value == "Meeting "

    def test_avatar_tab(self, picker):
        picker.set_tab("avatar")
        assert picker.hint == "Enter initials or use page initials"
        asyncio.run(picker.submit_query("Alice"))
        item = picker.sections()[0].items[0]
        assert item.id == "avatar-Ali"
        assert item.data.backgroundColor == "var(--rx-indigo-09)"
        assert picker.hint is None


# =========================================================================
# Selection
# =========================================================================


class TestChoose:
    def test_choose_reports_records_and_closes(self, picker, on_chosen):
        on_close = MagicMock()
        picker.on_close = on_close
        item = picker.choose({"type": "tabler-icon", "id": "home"})
        on_chosen.assert_called_once_with(item, False)
        on_close.assert_called_once_with()
        assert picker.closed
        assert picker.used_items.get()[0].id == "icon-home"

    def test_color_preset_applies_to_glyphs(self, counting, settings, on_chosen):
        store = MemoryStore({COLOR_PRESET_KEY: "#fb434c"})
        picker = PickerController(on_chosen, registry=counting, store=store, settings=settings)
        chosen = picker.choose("arrow-up")
        assert chosen.data.color == "#fb434c"
        assert picker.used_items.get()[0].data.color is None

    def test_color_preset_ignored_for_emoji(self, counting, settings, on_chosen):
        store = MemoryStore({COLOR_PRESET_KEY: "#fb434c"})
        picker = PickerController(on_chosen, registry=counting, store=store, settings=settings)
        assert picker.choose("grinning").data.color is None

    def test_avatar_gets_default_colors(self, picker):
        raw = IconItem.build(IconType.AVATAR, "AB")
        chosen = picker.choose(raw)
        assert chosen.data.backgroundColor == "var(--rx-indigo-09)"
        assert chosen.data.color == "var(--rx-indigo-10-alpha)"

    def test_avatar_colors_are_kept(self, picker):
        raw = IconItem.build(IconType.AVATAR, "AB", color="#fff", background_color="#000")
        assert picker.choose(raw) == raw

    def test_unreadable_choice_is_ignored(self, picker, on_chosen):
        assert picker.choose("") is None
        on_chosen.assert_not_called()
        assert not picker.closed

    def test_delete(self, picker, on_chosen):
        picker.delete()
        on_chosen.assert_called_once_with(None, False)
        assert picker.closed

    def test_set_color_recolors_current_glyph(self, counting, store, settings, on_chosen):
        picker = PickerController(
            on_chosen, registry=counting, store=store, settings=settings, icon_value="home"
        )
        picker.set_color("#00b5ed")
        recolored = on_chosen.call_args.args[0]
        assert recolored.data.color == "#00b5ed"
        assert on_chosen.call_args.args[1] is True
        assert store.get(COLOR_PRESET_KEY) == "#00b5ed"
        assert not picker.closed

    def test_set_color_without_glyph_only_saves(self, picker, on_chosen, store):
        picker.set_color(None)
        on_chosen.assert_not_called()
        assert store.get(COLOR_PRESET_KEY) == ""
        assert picker.color is None


# =========================================================================
# Keyboard
# =========================================================================


class TestKeyboard:
    def test_escape_clears_query_first(self, picker):
        on_close = MagicMock()
        picker.on_close = on_close
        asyncio.run(picker.submit_query("heart"))
        assert picker.handle_key("Escape")
        assert picker.query == ""
        assert picker.result is None
        on_close.assert_not_called()
        picker.handle_key("Escape")
        on_close.assert_called_once_with()

    def test_tab_enters_grid_at_first_item(self, picker):
        asyncio.run(picker.submit_query("heart"))
        assert picker.handle_key("Tab")
        assert picker.select_mode
        assert picker.navigator.current.id == "emoji-heart"

    def test_arrow_down_enters_grid(self, picker):
        picker.handle_key("ArrowDown")
        assert picker.select_mode
        assert picker.navigator.index == 0

    def test_arrow_up_in_input_is_swallowed(self, picker):
        assert picker.handle_key("ArrowUp")
        assert not picker.select_mode

    def test_leaving_grid_returns_to_input(self, picker):
        picker.handle_key("Tab")
        picker.handle_key("ArrowUp")
        assert not picker.select_mode
        assert picker.navigator.idle

    def test_enter_chooses_focused_item(self, picker, on_chosen):
        asyncio.run(picker.submit_query("heart"))
        picker.handle_key("Tab")
        picker.handle_key("ArrowRight")
        picker.handle_key("Enter")
        chosen = on_chosen.call_args.args[0]
        assert chosen.id == "icon-Heart"
        assert picker.closed

    def test_keep_open_choice_refreshes_grid(self, picker):
        picker.handle_key("Tab")
        first = picker.navigator.current
        picker.choose(first, keep_open=True)
        assert not picker.closed
        assert picker.select_mode
        assert picker.navigator.slots[0] == picker.used_items.get()[0]
        assert picker.navigator.slots[1:9] == [None] * 8
        assert picker.navigator.index == 0

    def test_new_query_leaves_grid(self, picker):
        picker.handle_key("Tab")
        asyncio.run(picker.submit_query("rocket"))
        assert not picker.select_mode
        assert picker.navigator.idle

    def test_on_change_fires(self, picker):
        on_change = MagicMock()
        picker.on_change = on_change
        asyncio.run(picker.submit_query("heart"))
        picker.reset_query()
        assert on_change.call_count == 2
