"""
TooltipController — Which point (if any) currently shows its tooltip.

State machine:

    Idle ──tap(p)──► Active(p)
    Active(p) ──tap(p)──► Idle
    Active(p) ──tap(q)──► Active(q)      (direct switch, no second tap)

Tooltip content is the point's value, falling back to the first line of its
note; points with neither never show a tooltip.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .annotations import Layer, RectMark, TextMark
from .geometry import GeometryConfig
from .points import DataPoint, PlacedPoint, index_by_id

logger = logging.getLogger(__name__)

TOOLTIP_WIDTH = 80
TOOLTIP_HEIGHT = 30
TOOLTIP_RISE = 50       # box top above the point
TOOLTIP_TEXT_RISE = 32  # text baseline above the point
TOOLTIP_RADIUS = 6


def tooltip_text(point: DataPoint) -> Optional[str]:
    if point.value:
        return point.value
    if point.note:
        lines = point.note.splitlines()
        if lines and lines[0]:
            return lines[0]
    return None


@dataclass(frozen=True)
class Tooltip:
    """Resolved tooltip for the active point."""
    point_id: str
    text: str
    box: RectMark
    label: TextMark

    @property
    def marks(self) -> tuple[RectMark, TextMark]:
        return (self.box, self.label)


class TooltipController:
    """Holds the single optional active point id."""

    def __init__(self, active_id: Optional[str] = None):
        self._active_id = active_id

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def is_idle(self) -> bool:
        return self._active_id is None

    def toggle(self, point_id: str) -> Optional[str]:
        """Tap a point. Returns the new active id (None when idle)."""
        if self._active_id == point_id:
            self._active_id = None
        else:
            self._active_id = point_id
        logger.debug("Tooltip toggled by %r -> %r", point_id, self._active_id)
        return self._active_id

    def clear(self) -> None:
        self._active_id = None

    def is_active(self, point_id: str) -> bool:
        return self._active_id is not None and self._active_id == point_id

    def visibility(self, points: Sequence[PlacedPoint]) -> dict[str, bool]:
        """Tooltip visibility per point id. Only the last point with the active id can show."""
        target = self._target(points)
        return {p.id: target is not None and p is target for p in points}

    def tooltip_for(self, points: Sequence[PlacedPoint],
                    geometry: GeometryConfig) -> Optional[Tooltip]:
        target = self._target(points)
        if target is None:
            return None
        text = tooltip_text(target)
        small = geometry.small_font_size
        box = RectMark(
            x=target.x - TOOLTIP_WIDTH / 2,
            y=target.y - TOOLTIP_RISE,
            width=TOOLTIP_WIDTH,
            height=TOOLTIP_HEIGHT,
            radius=TOOLTIP_RADIUS,
        )
        label = TextMark(target.x, target.y - TOOLTIP_TEXT_RISE, text, small,
                         layer=Layer.TOOLTIP, bold=True, kind="tooltip")
        return Tooltip(point_id=target.id, text=text, box=box, label=label)

    def _target(self, points: Sequence[PlacedPoint]) -> Optional[PlacedPoint]:
        if self._active_id is None:
            return None
        target = index_by_id(points).get(self._active_id)
        if target is None or tooltip_text(target) is None:
            return None
        return target
