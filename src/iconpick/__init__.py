"""Engine behind an emoji / glyph / text / avatar icon picker."""

from iconpick.models import IconData, IconItem, IconType, SearchResult, Section, Tab
from iconpick.navigation import GridNavigator
from iconpick.normalize import normalize
from iconpick.picker import PickerController
from iconpick.search import SearchIndexRegistry
from iconpick.storage import JsonFileStore, MemoryStore, UsedItemsCache

__version__ = "0.1.0"

__all__ = [
    "GridNavigator",
    "IconData",
    "IconItem",
    "IconType",
    "JsonFileStore",
    "MemoryStore",
    "PickerController",
    "SearchIndexRegistry",
    "SearchResult",
    "Section",
    "Tab",
    "UsedItemsCache",
    "normalize",
]
