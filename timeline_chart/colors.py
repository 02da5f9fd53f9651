"""
Color Palette & Theme System — All colors in BGR format (OpenCV convention).

Chart-specific colors (path stroke, point fill) come from ChartConfig as hex
strings; everything else (background, text, arrow heads, tooltip box) comes
from the active theme. Marks in a Scene only carry a color *role*; the
renderer resolves roles through resolve_role() at paint time.
"""

from __future__ import annotations

from dataclasses import dataclass

BGR = tuple[int, int, int]


@dataclass
class Theme:
    """Complete color theme for the chart."""

    name: str

    # Background & text
    bg: BGR
    text: BGR
    text_muted: BGR

    # Decorations
    arrow_head: BGR
    tooltip_bg: BGR
    tooltip_alpha: float = 0.98


# ────────────────────────────────────────────────────────────
# Hex parsing
# ────────────────────────────────────────────────────────────
def hex_to_bgr(value: str) -> BGR:
    """
    Convert "#rrggbb", "#rgb" or "#rrggbbaa" to a BGR tuple.

    The alpha channel of 8-digit colors is dropped. Raises ValueError on
    anything else.
    """
    raw = value.strip().lstrip("#")
    if len(raw) == 3:
        raw = "".join(c * 2 for c in raw)
    if len(raw) not in (6, 8):
        raise ValueError(f"Invalid hex color: {value!r}")
    try:
        r, g, b = (int(raw[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Invalid hex color: {value!r}") from None
    return (b, g, r)


# ────────────────────────────────────────────────────────────
# Built-in Themes
# ────────────────────────────────────────────────────────────

LIGHT_THEME = Theme(
    name="light",
    bg=hex_to_bgr("#f8f9fa"),
    text=hex_to_bgr("#333333"),
    text_muted=hex_to_bgr("#666666"),
    arrow_head=hex_to_bgr("#1b1b1bff"),
    tooltip_bg=hex_to_bgr("#ffffff"),
)

DARK_THEME = Theme(
    name="dark",
    bg=(24, 18, 18),
    text=(220, 220, 225),
    text_muted=(160, 150, 150),
    arrow_head=(235, 235, 235),
    tooltip_bg=(48, 40, 40),
    tooltip_alpha=0.9,
)

# Registry of all themes
THEMES: dict[str, Theme] = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}


def get_theme(name: str) -> Theme:
    """Get a theme by name. Raises KeyError if not found."""
    if name not in THEMES:
        available = ', '.join(THEMES.keys())
        raise KeyError(f"Theme '{name}' not found. Available: {available}")
    return THEMES[name]


def register_theme(theme: Theme) -> None:
    """Register a custom theme."""
    THEMES[theme.name] = theme


def resolve_role(role: str, theme: Theme, stroke: BGR, point_fill: BGR) -> BGR:
    """Map a mark's color role to a concrete BGR color."""
    if role == "stroke":
        return stroke
    if role == "point_fill":
        return point_fill
    if role == "text_muted":
        return theme.text_muted
    if role == "arrow_head":
        return theme.arrow_head
    if role == "tooltip_bg":
        return theme.tooltip_bg
    if role == "background":
        return theme.bg
    return theme.text
