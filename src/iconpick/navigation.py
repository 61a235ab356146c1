"""Keyboard focus over the picker's item grid.

All listed sections are laid out in rows of :data:`ROW_WIDTH` cells.  The
navigator flattens them into one row-major list, padding the last row of
every section with ``None`` sentinels, so moving up or down is always a
step of one row width even across section boundaries.  Sentinels are
skipped by continuing in the direction of travel; running off either end
of the list hands focus back to the query input (``index == -1``).
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from loguru import logger

from .models import IconItem, Section

ROW_WIDTH = 9

# Key names from browser events, textual and Qt-style hosts.
_KEY_ALIASES = {
    "arrowleft": "left",
    "arrowright": "right",
    "arrowup": "up",
    "arrowdown": "down",
    "return": "enter",
    "esc": "escape",
}


def normalize_key(key: str) -> str:
    """Lower-case *key* and fold known aliases (``ArrowUp`` -> ``up``)."""
    name = key.strip().lower()
    return _KEY_ALIASES.get(name, name)


class GridNavigator:
    """Focus state machine over a sentinel-padded, row-major item list.

    Parameters
    ----------
    row_width:
        Number of cells per row.
    on_activate:
        Called with the focused item when Enter is pressed.
    """

    def __init__(
        self,
        row_width: int = ROW_WIDTH,
        on_activate: Callable[[IconItem], None] | None = None,
    ) -> None:
        self.row_width = row_width
        self.on_activate = on_activate
        self.slots: list[IconItem | None] = []
        self.index = -1

    # -- state --------------------------------------------------------------

    @property
    def idle(self) -> bool:
        """``True`` while focus is on the query input."""
        return self.index < 0

    @property
    def current(self) -> IconItem | None:
        if 0 <= self.index < len(self.slots):
            return self.slots[self.index]
        return None

    def position(self, index: int | None = None) -> tuple[int, int]:
        """Return the ``(row, column)`` of *index* (default: current)."""
        index = self.index if index is None else index
        return divmod(index, self.row_width)

    # -- layout -------------------------------------------------------------

    def layout(self, sections: Iterable[Section | Sequence[IconItem]]) -> list[IconItem | None]:
        """Flatten *sections*, padding each to a whole number of rows."""
        slots: list[IconItem | None] = []
        for section in sections:
            items = section.items if isinstance(section, Section) else list(section)
            slots.extend(items)
            remainder = len(items) % self.row_width
            if remainder:
                slots.extend([None] * (self.row_width - remainder))
        return slots

    def rebuild(self, sections: Iterable[Section | Sequence[IconItem]]) -> IconItem | None:
        """Adopt a new listing and focus its first real item."""
        self.slots = self.layout(sections)
        self.index = -1
        return self.focus(0, 1)

    def reset(self) -> None:
        """Return focus to the query input."""
        self.index = -1

    # -- transitions --------------------------------------------------------

    def focus(self, index: int, step: int) -> IconItem | None:
        """Focus *index*, skipping sentinels by *step*; ``None`` means idle."""
        n = index
        while 0 <= n < len(self.slots) and self.slots[n] is None:
            n += step
        if 0 <= n < len(self.slots):
            self.index = n
            return self.slots[n]
        self.index = -1
        return None

    def move(self, delta: int) -> IconItem | None:
        return self.focus(self.index + delta, 1 if delta > 0 else -1)

    def handle_key(self, key: str) -> bool:
        """Apply *key*; return ``True`` when the key was consumed."""
        name = normalize_key(key)
        moves = {
            "left": -1,
            "right": 1,
            "tab": 1,
            "up": -self.row_width,
            "down": self.row_width,
        }
        if name == "enter":
            item = self.current
            if item is not None and self.on_activate is not None:
                self.on_activate(item)
            return item is not None
        if name in moves:
            self.move(moves[name])
            logger.debug(f"grid focus -> {self.index} on {name}")
            return True
        return False
