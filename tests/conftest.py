"""Shared fixtures: small, deterministic corpora and an in-memory store."""
import pytest

from iconpick.config import PickerSettings
from iconpick.models import EmojiEntry
from iconpick.search import EmojiCorpus, GlyphCorpus, SearchIndexRegistry
from iconpick.storage import MemoryStore


@pytest.fixture
def emojis():
    return EmojiCorpus(
        [
            EmojiEntry(id="grinning", name="Grinning Face", native="\U0001F600", keywords=("smile", "happy")),
            EmojiEntry(id="smile", name="Grinning Face with Smiling Eyes", native="\U0001F604", keywords=("happy", "joy")),
            EmojiEntry(id="heart", name="Red Heart", native="❤️", keywords=("love",)),
            EmojiEntry(id="+1", name="Thumbs Up", native="\U0001F44D", keywords=("like", "yes")),
            EmojiEntry(id="rocket", name="Rocket", native="\U0001F680", keywords=("space", "launch")),
        ]
    )


@pytest.fixture
def glyphs():
    return GlyphCorpus.from_identifiers(
        [
            "IconAb",
            "IconAb2",
            "IconAbOff",
            "IconArrowUp",
            "IconArrowDown",
            "IconArrowLeft",
            "IconHome",
            "IconHeart",
            "IconStar",
            "IconSettings",
        ]
    )


@pytest.fixture
def registry(glyphs, emojis):
    return SearchIndexRegistry(glyph_corpus=glyphs, emoji_corpus=emojis)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def settings():
    return PickerSettings(debounce_ms=0)
