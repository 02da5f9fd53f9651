"""
AnnotationPlanner — Everything drawn on top of (or around) the path.

Z-order (Layer) of the final scene:
    BACKGROUND  title, subtitle, rotated axis caption
    PATH        the connected baseline path
    POINTS      point dots
    CAPTIONS    year / age / note / amount captions, callout caption
    TOOLTIP     active tooltip box + text
    ARROWS      terminal callout connector + head + value, side arrows

All positions are fixed offsets from the placed points or fixed fractions of
the canvas width; nothing is tuned per dataset.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

from .geometry import GeometryConfig
from .points import PlacedPoint
from .text import TextBundle


class Layer(IntEnum):
    BACKGROUND = 0
    PATH = 1
    POINTS = 2
    CAPTIONS = 3
    TOOLTIP = 4
    ARROWS = 5


# ────────────────────────────────────────────────────────────
# Marks (scene-graph primitives)
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TextMark:
    x: float
    y: float
    text: str
    font_size: int
    layer: Layer = Layer.CAPTIONS
    bold: bool = False
    anchor: str = "middle"      # "start" | "middle" | "end"
    rotation: int = 0           # degrees, only 0 / ±90 are rendered
    role: str = "text"
    kind: str = "caption"


@dataclass(frozen=True)
class LineMark:
    x1: float
    y1: float
    x2: float
    y2: float
    width: int
    layer: Layer = Layer.ARROWS
    role: str = "stroke"
    kind: str = "line"


@dataclass(frozen=True)
class PolygonMark:
    points: tuple[tuple[float, float], ...]
    layer: Layer = Layer.ARROWS
    role: str = "arrow_head"
    kind: str = "arrow_head"


@dataclass(frozen=True)
class CircleMark:
    x: float
    y: float
    radius: int
    layer: Layer = Layer.POINTS
    role: str = "point_fill"
    outline_role: str = "stroke"
    outline_width: int = 2
    kind: str = "dot"
    point_id: str = ""


@dataclass(frozen=True)
class RectMark:
    x: float
    y: float
    width: float
    height: float
    radius: int = 0
    layer: Layer = Layer.TOOLTIP
    role: str = "tooltip_bg"
    outline_role: str = "stroke"
    outline_width: int = 1
    kind: str = "tooltip_box"


Mark = TextMark | LineMark | PolygonMark | CircleMark | RectMark


# ────────────────────────────────────────────────────────────
# Fixed offsets
# ────────────────────────────────────────────────────────────
TITLE_Y = 25
SUBTITLE_Y = 42
AXIS_LABEL_X = 15

CAPTION_OFFSET = 25
AGE_CAPTION_OFFSET = 40
NOTE_OFFSET = -30
AMOUNT_BASE_OFFSET = 40
AMOUNT_LINE_HEIGHT = 20

CALLOUT_TOP_Y = 60
CALLOUT_VALUE_Y = 52
CALLOUT_GAP = 20
CALLOUT_CAPTION_OFFSET = 60
CALLOUT_STROKE = 3

SIDE_ARROW_Y = 80
SIDE_ARROW_TIP = 0.05
SIDE_ARROW_SHAFT = (0.06, 0.15)
SIDE_ARROW_LENGTH = 15
SIDE_ARROW_HALF_HEIGHT = 5


def find_callout_target(points: Sequence[PlacedPoint]) -> Optional[PlacedPoint]:
    """Last point flagged last_payment that also carries a value."""
    for p in reversed(points):
        if p.last_payment and p.value:
            return p
    return None


class AnnotationPlanner:
    """Plans every text and decoration mark for a list of placed points."""

    def __init__(self, geometry: GeometryConfig, text: TextBundle):
        self.geometry = geometry
        self.text = text

    def plan(self, points: Sequence[PlacedPoint]) -> list[Mark]:
        marks: list[Mark] = []
        marks.extend(self.static_marks())
        for p in points:
            marks.extend(self.point_marks(p))
        target = find_callout_target(points)
        if target is not None:
            marks.extend(self.callout_marks(target))
        return marks

    # ──────────────────────────────────────────────────────
    # Data-independent decorations
    # ──────────────────────────────────────────────────────
    def static_marks(self) -> list[Mark]:
        g = self.geometry
        w = g.width
        marks: list[Mark] = [
            TextMark(w / 2, TITLE_Y, self.text.coverage, 16,
                     layer=Layer.BACKGROUND, bold=True, kind="title"),
            TextMark(w / 2, SUBTITLE_Y, self.text.subtitle, 14,
                     layer=Layer.BACKGROUND, role="text_muted", kind="subtitle"),
            TextMark(AXIS_LABEL_X, g.center_y, self.text.axis_label, g.font_size,
                     layer=Layer.BACKGROUND, bold=True, rotation=-90,
                     kind="axis_label"),
        ]
        marks.extend(self._side_arrow(w, direction=-1))
        marks.extend(self._side_arrow(w, direction=1))
        return marks

    def _side_arrow(self, w: float, direction: int) -> list[Mark]:
        """Shaft + triangular head; direction -1 points left, +1 right."""
        y = SIDE_ARROW_Y
        lo, hi = SIDE_ARROW_SHAFT
        if direction < 0:
            tip = w * SIDE_ARROW_TIP
            x1, x2 = w * lo, w * hi
        else:
            tip = w * (1 - SIDE_ARROW_TIP)
            x1, x2 = w * (1 - hi), w * (1 - lo)
        base = tip - direction * SIDE_ARROW_LENGTH
        return [
            LineMark(x1, y, x2, y, CALLOUT_STROKE, kind="side_arrow"),
            PolygonMark(((tip, y),
                         (base, y - SIDE_ARROW_HALF_HEIGHT),
                         (base, y + SIDE_ARROW_HALF_HEIGHT)),
                        kind="side_arrow_head"),
        ]

    # ──────────────────────────────────────────────────────
    # Per-point captions
    # ──────────────────────────────────────────────────────
    def point_marks(self, p: PlacedPoint) -> list[Mark]:
        g = self.geometry
        small = g.small_font_size
        marks: list[Mark] = [
            CircleMark(p.x, p.y, g.dot_radius, point_id=p.id),
        ]

        caption = p.caption
        if caption:
            offset = AGE_CAPTION_OFFSET if p.is_age else CAPTION_OFFSET
            marks.append(TextMark(p.x, p.y + offset, caption, small))
        if p.is_age:
            marks.append(TextMark(p.x, p.y + CAPTION_OFFSET, self.text.at_age,
                                  small - 2, kind="age"))

        if p.major and p.note:
            marks.append(TextMark(p.x, p.y + NOTE_OFFSET,
                                  p.note.splitlines()[0], small, kind="note"))

        if p.level is not None and p.level >= 0 and p.amount_label:
            y = p.y - AMOUNT_BASE_OFFSET - p.level * AMOUNT_LINE_HEIGHT
            marks.append(TextMark(p.x, y, p.amount_label, small,
                                  bold=True, kind="amount"))
        return marks

    # ──────────────────────────────────────────────────────
    # Terminal callout
    # ──────────────────────────────────────────────────────
    def callout_marks(self, p: PlacedPoint) -> list[Mark]:
        x, y = p.x, p.y
        return [
            LineMark(x, CALLOUT_TOP_Y, x, y - CALLOUT_GAP, CALLOUT_STROKE,
                     kind="callout"),
            PolygonMark(((x - 6, y - 23), (x + 6, y - 23), (x, y - 15)),
                        kind="callout_head"),
            TextMark(x, CALLOUT_VALUE_Y, p.value or "", 16,
                     layer=Layer.ARROWS, bold=True, kind="callout_value"),
            TextMark(x, y + CALLOUT_CAPTION_OFFSET, self.text.premium_end,
                     self.geometry.small_font_size, kind="callout_caption"),
        ]
