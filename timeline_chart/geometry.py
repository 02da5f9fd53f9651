"""
Geometry — Layout constants derived from canvas size and point count.

    centerY   = round(H/2 + baseline_offset)
    available = max(min_available_width, W - 2m)
    gap       = available / max(1, n - 1)

    ●───────●───────●───────●        x_i = m + gap * i
    ◄ gap  ►                         y_i = centerY

Sizes scale linearly with the width and are clamped to a floor so narrow
canvases stay legible. At the reference width of 980px they resolve to the
fixed values of the reference layout (dot 8, stroke 3, font 14/12).
Nothing here raises: bad inputs are clamped.
"""

from __future__ import annotations

from dataclasses import dataclass

REFERENCE_WIDTH = 980
MAX_AMPLITUDE = 20.0


@dataclass(frozen=True)
class GeometryConfig:
    """Resolved layout constants for one layout pass."""
    width: int
    height: int
    margin: float
    count: int
    center_y: int
    available_width: float
    gap: float
    dot_radius: int
    hit_radius: int
    stroke_width: int
    font_size: int
    small_font_size: int
    zigzag_amplitude: float


def resolve_geometry(
    width: int,
    height: int,
    margin: float,
    count: int,
    *,
    baseline_offset: float = 20,
    min_available_width: float = 200,
    amplitude: float | None = None,
) -> GeometryConfig:
    """Compute the GeometryConfig for a canvas and a point count."""
    width = max(1, int(width))
    height = max(1, int(height))
    margin = max(0.0, float(margin))
    count = max(0, int(count))

    center_y = round(height / 2 + baseline_offset)
    available = max(float(min_available_width), width - 2 * margin)
    gap = available / max(1, count - 1) if count > 1 else 0.0

    dot_radius = max(4, round(width / 120))

    if amplitude is None:
        amp = min(MAX_AMPLITUDE, gap * 0.4)
    else:
        amp = max(0.0, float(amplitude))

    return GeometryConfig(
        width=width,
        height=height,
        margin=margin,
        count=count,
        center_y=center_y,
        available_width=available,
        gap=gap,
        dot_radius=dot_radius,
        hit_radius=dot_radius * 2,
        stroke_width=max(2, round(width / 320)),
        font_size=max(10, round(width / 70)),
        small_font_size=max(9, round(width / 82)),
        zigzag_amplitude=amp,
    )


def fit_width(window_width: int, max_width: int = REFERENCE_WIDTH,
              padding: int = 24) -> int:
    """Chart width for a host window: never wider than max_width."""
    return max(1, min(max_width, int(window_width) - padding))
