"""The glyph-icon corpus and its fuzzy matcher.

Glyph names are derived from an icon font's component identifiers, e.g.
``IconArrowUp`` becomes ``Arrow Up``.  The corpus is built on first use and
kept for the lifetime of the process.
"""

from __future__ import annotations

import json
import re
from difflib import SequenceMatcher
from importlib import resources
from typing import Iterable

from loguru import logger

from ..models import IconItem, IconType

DEFAULT_LIMIT = 100
FUZZY_THRESHOLD = 0.6

# Glyphs the font ships but that fail to render.
BROKEN_GLYPHS = frozenset({"Ab", "Ab 2", "Ab Off"})

_CAMEL_WORDS = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_QUERY_SEPARATORS = re.compile(r"[-_\s]+")


def glyph_name(identifier: str) -> str:
    """Turn ``IconArrowUp`` (or ``arrow_up``) into ``Arrow Up``."""
    words = [w[:1].upper() + w[1:].lower() for w in _CAMEL_WORDS.findall(identifier)]
    if len(words) > 1 and words[0] == "Icon":
        words = words[1:]
    return " ".join(words)


def load_default_identifiers() -> list[str]:
    """Read the identifier list bundled with the package."""
    text = resources.files("iconpick").joinpath("data/glyph_ids.json").read_text(encoding="utf-8")
    return list(json.loads(text))


def _score(query: str, candidate: str) -> float:
    """Similarity of *candidate* to a normalized, lowercase *query*.

    Returns 0.0 for candidates that should not be listed at all.
    """
    name = candidate.lower()
    ratio = SequenceMatcher(None, query, name).ratio()
    if name == query:
        bonus = 1.0
    elif name.startswith(query):
        bonus = 0.6
    elif query in name:
        bonus = 0.4
    elif all(any(w.startswith(q) for w in name.split()) for q in query.split()):
        bonus = 0.3
    elif ratio >= FUZZY_THRESHOLD:
        bonus = 0.0
    else:
        return 0.0
    return ratio + bonus


class GlyphCorpus:
    """Searchable list of glyph names."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names: list[str] = list(names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    @classmethod
    def from_identifiers(cls, identifiers: Iterable[str]) -> GlyphCorpus:
        names: list[str] = []
        seen: set[str] = set()
        for ident in identifiers:
            name = glyph_name(ident)
            if not name or name in BROKEN_GLYPHS or name in seen:
                continue
            seen.add(name)
            names.append(name)
        logger.debug(f"Built glyph corpus with {len(names)} names")
        return cls(names)

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[str]:
        """Return up to *limit* names ranked by similarity, best first."""
        q = _QUERY_SEPARATORS.sub(" ", query).strip().lower()
        if not q:
            return []
        scored = []
        for pos, name in enumerate(self.names):
            score = _score(q, name)
            if score > 0:
                scored.append((-score, pos, name))
        scored.sort()
        return [name for _, _, name in scored[:limit]]


def glyph_item(name: str) -> IconItem:
    """Map a glyph name to a canonical icon item."""
    return IconItem.build(IconType.ICON, name)


_glyph_corpus: GlyphCorpus | None = None
_glyph_identifiers: list[str] | None = None


def set_glyph_identifiers(identifiers: Iterable[str] | None) -> None:
    """Supply the host's icon font identifiers; resets the cached corpus.

    ``None`` goes back to the bundled identifier list.
    """
    global _glyph_corpus, _glyph_identifiers
    _glyph_identifiers = list(identifiers) if identifiers is not None else None
    _glyph_corpus = None


def get_glyph_corpus() -> GlyphCorpus:
    """Return the process-wide glyph corpus, building it on first use."""
    global _glyph_corpus
    if _glyph_corpus is None:
        identifiers = _glyph_identifiers
        if identifiers is None:
            identifiers = load_default_identifiers()
        _glyph_corpus = GlyphCorpus.from_identifiers(identifiers)
    return _glyph_corpus
