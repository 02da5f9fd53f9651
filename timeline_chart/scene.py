"""
Scene — The single layout entry point.

    points + ChartConfig
        │
        ├─► resolve_geometry ──► place_points ──► PathBuilder.build
        │                              │
        │                              ├──► AnnotationPlanner.plan
        │                              └──► TooltipController.tooltip_for
        ▼
      Scene(path, points, marks, tooltips)

Everything here is a pure function of its inputs plus the tooltip's active
id; a Scene is rebuilt from scratch on every change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .annotations import AnnotationPlanner, Layer, Mark
from .config import ChartConfig
from .geometry import GeometryConfig, resolve_geometry
from .path import ChartPath, PathBuilder
from .points import (
    PlacedPoint, PointLike, coerce_points, find_duplicate_ids, place_points,
)
from .text import TextBundle, get_text_bundle
from .tooltip import Tooltip, TooltipController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    """Renderable scene graph for one layout pass."""
    config: ChartConfig
    geometry: GeometryConfig
    text: TextBundle
    points: tuple[PlacedPoint, ...]
    path: ChartPath
    marks: tuple[Mark, ...]
    tooltips: dict[str, bool]
    active_tooltip: Optional[Tooltip] = None

    def layer(self, layer: Layer) -> list[Mark]:
        return [m for m in self.marks if m.layer == layer]

    def marks_of(self, kind: str) -> list[Mark]:
        return [m for m in self.marks if m.kind == kind]


def build_scene(points: Optional[Iterable[PointLike]],
                config: Optional[ChartConfig] = None,
                *,
                tooltip: Optional[TooltipController] = None) -> Scene:
    """Lay out `points` for `config` and return the full scene."""
    cfg = config or ChartConfig()
    data = coerce_points(points)
    if not data:
        logger.debug("Empty point list, drawing decorations only")
    find_duplicate_ids(data)

    geometry = resolve_geometry(
        cfg.width, cfg.height, cfg.margin_horizontal, len(data),
        baseline_offset=cfg.baseline_offset,
        min_available_width=cfg.min_available_width,
        amplitude=cfg.zigzag_amplitude,
    )
    text = get_text_bundle(cfg.language)
    placed = place_points(data, geometry)

    path = PathBuilder(
        policy=cfg.segment_policy,
        zigzag_segments=cfg.zigzag_segments,
        amplitude=geometry.zigzag_amplitude,
        major_damping=cfg.major_damping,
    ).build(placed)

    marks = AnnotationPlanner(geometry, text).plan(placed)

    tooltip = tooltip or TooltipController()
    active = None
    if cfg.enable_tooltips:
        active = tooltip.tooltip_for(placed, geometry)
        if active is not None:
            marks.extend(active.marks)
        visibility = tooltip.visibility(placed)
    else:
        visibility = {p.id: False for p in placed}

    # Stable sort keeps planning order inside a layer
    marks.sort(key=lambda m: m.layer)

    return Scene(
        config=cfg,
        geometry=geometry,
        text=text,
        points=placed,
        path=path,
        marks=tuple(marks),
        tooltips=visibility,
        active_tooltip=active,
    )


def render_scene(points: Optional[Iterable[PointLike]], *,
                 canvas_width: int = 980,
                 canvas_height: int = 280,
                 margin_horizontal: int = 40,
                 stroke_color: str = "#2c8592",
                 point_fill_color: str = "#c9e04a",
                 language_tag: str = "th",
                 active_id: Optional[str] = None) -> Scene:
    """Keyword-style entry point mirroring the chart component's props."""
    config = ChartConfig(
        width=canvas_width,
        height=canvas_height,
        margin_horizontal=margin_horizontal,
        stroke_color=stroke_color,
        point_fill_color=point_fill_color,
        language=language_tag,
    )
    return build_scene(points, config, tooltip=TooltipController(active_id))
