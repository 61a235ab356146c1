"""Color token lookup, avatar defaults and the icon color presets."""

from __future__ import annotations

import re
from typing import Protocol

# Accent presets offered by the color picker; ``None`` clears the preset.
COLOR_PRESETS: tuple[str | None, ...] = (
    "#6e7b8b",
    "#5e69d2",
    "#00b5ed",
    "#00b55b",
    "#f2be00",
    "#e47a00",
    "#f38e81",
    "#fb434c",
    None,
)

_AVATAR_HUE = "indigo"
_RGBA_ALPHA = re.compile(r",\s*[\d.]+\)$")


class ColorTokens(Protocol):
    """Host application color-token lookup."""

    def variable(self, name: str, shade: str, alt: bool = False) -> str: ...


class CssColorTokens:
    """Resolve tokens to CSS custom property references.

    ``variable("indigo", "09")`` gives ``var(--rx-indigo-09)``; the alt mode
    selects the translucent ``-alpha`` scale.
    """

    def __init__(self, prefix: str = "rx") -> None:
        self.prefix = prefix

    def variable(self, name: str, shade: str, alt: bool = False) -> str:
        suffix = "-alpha" if alt else ""
        return f"var(--{self.prefix}-{name}-{shade}{suffix})"


default_tokens: ColorTokens = CssColorTokens()


def avatar_defaults(tokens: ColorTokens | None = None) -> tuple[str, str]:
    """Return the ``(backgroundColor, color)`` pair used for new avatars."""
    tokens = tokens or default_tokens
    return tokens.variable(_AVATAR_HUE, "09"), tokens.variable(_AVATAR_HUE, "10", True)


def translucent_background(color: str | None) -> str | None:
    """Return *color* with roughly 31% opacity for avatar backgrounds.

    Six digit hex colors become ``rgba(...)``, existing ``rgba`` values get
    their alpha replaced and CSS variables are wrapped in ``color-mix``.
    Anything else is returned unchanged.
    """
    if not isinstance(color, str):
        return color
    hex_part = color[1:] if color.startswith("#") else ""
    if len(hex_part) == 6:
        try:
            r, g, b = (int(hex_part[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            return color
        return f"rgba({r},{g},{b},0.314)"
    if "rgba" in color:
        return _RGBA_ALPHA.sub(",0.314)", color)
    if color.startswith("var("):
        return f"color-mix(in srgb, {color} 31.4%, transparent)"
    return color
