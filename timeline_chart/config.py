"""
Configuration — Dataclasses for chart settings and the segment policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .colors import hex_to_bgr


class SegmentPolicy(Enum):
    """How each segment between two points is drawn."""
    INDEX = "index"              # listed segments zigzag, the rest straight
    ALTERNATING = "alternating"  # every segment deflects up/down by parity


DEFAULT_ZIGZAG_SEGMENTS = frozenset({4, 5, 7})


@dataclass
class ChartConfig:
    r"""
    Master configuration for the timeline chart.

    Layout diagram:
    ┌─────────────────────────── width ───────────────────────────┐
    │                     title / subtitle                        │
    │   ◄────                                           ────►     │
    │ a                    amount captions           value        │
    │ x                                                │          │
    │ i  ●────●────●────●─/\/──●─/\/──●────●─/\/──●────▼          │
    │ s  1    2    5   10     15     20   60     70   90          │
    │      ◄ margin ►                           at age            │
    └─────────────────────────────────────────────────────────────┘
    """

    # ── Dimensions ──
    width: int = 980
    height: int = 280
    margin_horizontal: int = 40

    # ── Colors ──
    stroke_color: str = "#2c8592"
    point_fill_color: str = "#c9e04a"
    theme: str = "light"

    # ── Text ──
    language: str = "th"

    # ── Path ──
    segment_policy: SegmentPolicy = SegmentPolicy.INDEX
    zigzag_segments: frozenset[int] = field(
        default_factory=lambda: DEFAULT_ZIGZAG_SEGMENTS)
    zigzag_amplitude: float | None = None   # None = min(20, gap * 0.4)
    major_damping: float = 0.5              # alternating policy only

    # ── Layout ──
    baseline_offset: int = 20
    min_available_width: int = 200

    # ── Interaction ──
    enable_tooltips: bool = True
    screenshot_dir: str = "."

    # ── Computed properties ──
    @property
    def stroke_bgr(self) -> tuple[int, int, int]:
        return hex_to_bgr(self.stroke_color)

    @property
    def point_fill_bgr(self) -> tuple[int, int, int]:
        return hex_to_bgr(self.point_fill_color)
