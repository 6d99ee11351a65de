"""Lenient color parsing for marker, line and polygon styling."""

from __future__ import annotations

import logging
import re

LOGGER = logging.getLogger(__name__)

FALLBACK_COLOR = "#ff0000"

NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "darkgray": "#444444",
    "darkgrey": "#444444",
    "gray": "#888888",
    "grey": "#888888",
    "lightgray": "#cccccc",
    "lightgrey": "#cccccc",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#00ff00",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "aqua": "#00ffff",
    "fuchsia": "#ff00ff",
    "lime": "#00ff00",
    "maroon": "#800000",
    "navy": "#000080",
    "olive": "#808000",
    "purple": "#800080",
    "silver": "#c0c0c0",
    "teal": "#008080",
}

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def parse_color(value: str) -> str:
    """
    Parse a `#RRGGBB`, `#AARRGGBB` or named color.

    Returns: Canonical lowercase hex string.
    Raises: ValueError if `value` is not a recognised color.
    """
    text = value.strip()
    if _HEX_RE.match(text):
        return text.lower()
    named = NAMED_COLORS.get(text.lower())
    if named is not None:
        return named
    raise ValueError(f"Unknown color: {value!r}")


def resolve_color(value: object, fallback: str = FALLBACK_COLOR) -> str:
    """Parse `value` as a color, returning `fallback` when it is not one."""
    if isinstance(value, str):
        try:
            return parse_color(value)
        except ValueError:
            pass
    LOGGER.debug("Invalid color %r, using %s", value, fallback)
    return fallback
