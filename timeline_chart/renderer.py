"""
Renderer — Paints a Scene onto an OpenCV canvas.

Architecture:
=============
    Scene.marks (sorted by Layer) ──► _canvas (H×W×3 uint8 BGR)

    BACKGROUND   fill + title + subtitle + rotated axis caption
    PATH         cv2.polylines through ChartPath.vertices
    POINTS       filled dots with stroke outline
    CAPTIONS     anchored cv2.putText
    TOOLTIP      blended rounded box + bold value
    ARROWS       connector lines + filled triangle heads

The canvas buffer is reused while the scene size stays the same. Hershey
fonts only cover ASCII; other glyphs are drawn as '?'.
"""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from .annotations import (
    CircleMark, Layer, LineMark, Mark, PolygonMark, RectMark, TextMark,
)
from .colors import BGR, Theme, get_theme, resolve_role
from .config import ChartConfig
from .scene import Scene

logger = logging.getLogger(__name__)

FONT = cv2.FONT_HERSHEY_SIMPLEX
# Hershey simplex glyphs are ~22px tall at scale 1.0 once padding is included
FONT_PX_PER_SCALE = 30.0


class Renderer:
    """Stateful renderer that owns the canvas buffer."""

    def __init__(self, config: ChartConfig, theme: Optional[Theme] = None):
        self._config = config
        self._theme = theme or get_theme(config.theme)
        self._line_type = cv2.LINE_AA
        self._canvas = np.zeros((config.height, config.width, 3), dtype=np.uint8)
        self._warned_glyphs = False

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas

    @property
    def theme(self) -> Theme:
        return self._theme

    @theme.setter
    def theme(self, t: Theme) -> None:
        self._theme = t

    # ──────────────────────────────────────────────────────
    # Main render pipeline
    # ──────────────────────────────────────────────────────
    def render(self, scene: Scene) -> np.ndarray:
        """Full render pipeline. Returns canvas (H×W×3 uint8 BGR)."""
        g = scene.geometry
        if self._canvas.shape[:2] != (g.height, g.width):
            self._canvas = np.zeros((g.height, g.width, 3), dtype=np.uint8)
        self._canvas[:] = self._theme.bg

        stroke = scene.config.stroke_bgr
        fill = scene.config.point_fill_bgr
        path_drawn = False

        for mark in scene.marks:
            if not path_drawn and mark.layer > Layer.PATH:
                self._draw_path(scene, stroke)
                path_drawn = True
            self._draw_mark(mark, stroke, fill)

        if not path_drawn:
            self._draw_path(scene, stroke)

        return self._canvas

    def _color(self, role: str, stroke: BGR, fill: BGR) -> BGR:
        return resolve_role(role, self._theme, stroke, fill)

    def _draw_mark(self, mark: Mark, stroke: BGR, fill: BGR) -> None:
        if isinstance(mark, TextMark):
            self._draw_text(mark, self._color(mark.role, stroke, fill))
        elif isinstance(mark, LineMark):
            cv2.line(self._canvas, _pt(mark.x1, mark.y1), _pt(mark.x2, mark.y2),
                     self._color(mark.role, stroke, fill), mark.width,
                     self._line_type)
        elif isinstance(mark, PolygonMark):
            pts = np.array([_pt(x, y) for x, y in mark.points], dtype=np.int32)
            cv2.fillPoly(self._canvas, [pts],
                         self._color(mark.role, stroke, fill), self._line_type)
        elif isinstance(mark, CircleMark):
            center = _pt(mark.x, mark.y)
            cv2.circle(self._canvas, center, mark.radius,
                       self._color(mark.role, stroke, fill), -1, self._line_type)
            cv2.circle(self._canvas, center, mark.radius,
                       self._color(mark.outline_role, stroke, fill),
                       mark.outline_width, self._line_type)
        elif isinstance(mark, RectMark):
            self._draw_box(mark, stroke, fill)

    # ──────────────────────────────────────────────────────
    # Path
    # ──────────────────────────────────────────────────────
    def _draw_path(self, scene: Scene, stroke: BGR) -> None:
        verts = scene.path.vertices
        if len(verts) < 2:
            return
        pts = np.round(verts).astype(np.int32)
        cv2.polylines(self._canvas, [pts], False, stroke,
                      scene.geometry.stroke_width, self._line_type)

    # ──────────────────────────────────────────────────────
    # Text
    # ──────────────────────────────────────────────────────
    def _draw_text(self, mark: TextMark, color: BGR) -> None:
        text = self._printable(mark.text)
        if not text:
            return
        scale = mark.font_size / FONT_PX_PER_SCALE
        thickness = 2 if mark.bold else 1
        (tw, th), baseline = cv2.getTextSize(text, FONT, scale, thickness)

        if mark.rotation in (90, -90):
            self._draw_rotated_text(mark, text, color, scale, thickness,
                                    tw, th, baseline)
            return

        x = _anchor_x(mark.x, tw, mark.anchor)
        cv2.putText(self._canvas, text, (int(round(x)), int(round(mark.y))),
                    FONT, scale, color, thickness, self._line_type)

    def _draw_rotated_text(self, mark: TextMark, text: str, color: BGR,
                           scale: float, thickness: int,
                           tw: int, th: int, baseline: int) -> None:
        """Draw into a mask patch, rotate it, and stamp it centered on (x, y)."""
        ph = th + baseline + 2
        patch = np.zeros((ph, tw + 2), dtype=np.uint8)
        cv2.putText(patch, text, (1, th + 1), FONT, scale, 255, thickness,
                    self._line_type)
        code = (cv2.ROTATE_90_COUNTERCLOCKWISE if mark.rotation < 0
                else cv2.ROTATE_90_CLOCKWISE)
        patch = cv2.rotate(patch, code)

        h, w = patch.shape
        top = int(round(mark.y - h / 2))
        left = int(round(mark.x - w / 2))
        self._stamp(patch, left, top, color)

    def _stamp(self, mask: np.ndarray, left: int, top: int, color: BGR) -> None:
        """Blend `color` into the canvas through `mask`, clipped to the canvas."""
        H, W = self._canvas.shape[:2]
        h, w = mask.shape
        x0, y0 = max(0, left), max(0, top)
        x1, y1 = min(W, left + w), min(H, top + h)
        if x0 >= x1 or y0 >= y1:
            return
        sub = mask[y0 - top:y1 - top, x0 - left:x1 - left].astype(np.float32) / 255.0
        region = self._canvas[y0:y1, x0:x1].astype(np.float32)
        tint = np.array(color, dtype=np.float32)
        blended = region * (1.0 - sub[..., None]) + tint * sub[..., None]
        self._canvas[y0:y1, x0:x1] = blended.astype(np.uint8)

    def _printable(self, text: str) -> str:
        if text.isascii():
            return text
        if not self._warned_glyphs:
            logger.debug("Non-ASCII text %r drawn with '?' placeholders", text)
            self._warned_glyphs = True
        return "".join(c if c.isascii() else "?" for c in text)

    # ──────────────────────────────────────────────────────
    # Tooltip box
    # ──────────────────────────────────────────────────────
    def _draw_box(self, mark: RectMark, stroke: BGR, fill: BGR) -> None:
        x, y = int(round(mark.x)), int(round(mark.y))
        w, h = int(round(mark.width)), int(round(mark.height))
        H, W = self._canvas.shape[:2]
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(W, x + w), min(H, y + h)
        if x0 >= x1 or y0 >= y1:
            return

        # Semi-transparent fill, same blend as a legend overlay
        alpha = self._theme.tooltip_alpha
        overlay = self._canvas[y0:y1, x0:x1].copy()
        box = np.full_like(overlay, self._color(mark.role, stroke, fill))
        mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
        _rounded_rect(mask, x - x0, y - y0, w, h, mark.radius, 255, -1)
        blended = cv2.addWeighted(box, alpha, overlay, 1.0 - alpha, 0)
        inside = mask > 0
        overlay[inside] = blended[inside]
        self._canvas[y0:y1, x0:x1] = overlay

        _rounded_rect(self._canvas, x, y, w, h, mark.radius,
                      self._color(mark.outline_role, stroke, fill),
                      mark.outline_width, self._line_type)


# ──────────────────────────────────────────────────────
# Utility
# ──────────────────────────────────────────────────────
def _pt(x: float, y: float) -> tuple[int, int]:
    return int(round(x)), int(round(y))


def _anchor_x(x: float, text_width: int, anchor: str) -> float:
    if anchor == "middle":
        return x - text_width / 2
    if anchor == "end":
        return x - text_width
    return x


def _rounded_rect(img: np.ndarray, x: int, y: int, w: int, h: int, r: int,
                  color, thickness: int, line_type: int = cv2.LINE_8) -> None:
    """Rectangle with quarter-circle corners; thickness -1 fills."""
    r = max(0, min(r, w // 2, h // 2))
    if r == 0:
        cv2.rectangle(img, (x, y), (x + w, y + h), color, thickness, line_type)
        return

    corners = (
        ((x + r, y + r), 180),
        ((x + w - r, y + r), 270),
        ((x + w - r, y + h - r), 0),
        ((x + r, y + h - r), 90),
    )
    for center, start in corners:
        cv2.ellipse(img, center, (r, r), 0, start, start + 90,
                    color, thickness, line_type)

    if thickness < 0:
        cv2.rectangle(img, (x + r, y), (x + w - r, y + h), color, -1, line_type)
        cv2.rectangle(img, (x, y + r), (x + w, y + h - r), color, -1, line_type)
    else:
        cv2.line(img, (x + r, y), (x + w - r, y), color, thickness, line_type)
        cv2.line(img, (x + r, y + h), (x + w - r, y + h), color, thickness, line_type)
        cv2.line(img, (x, y + r), (x, y + h - r), color, thickness, line_type)
        cv2.line(img, (x + w, y + r), (x + w, y + h - r), color, thickness, line_type)
