"""
TimelineChart Core — Main class that orchestrates all modules.

This is the primary public interface. It coordinates:
  - Data points and ChartConfig (inputs)
  - TooltipController (the only interaction state)
  - build_scene (pure layout pipeline)
  - Renderer (OpenCV canvas)
  - Interactions (taps, keyboard, screenshots)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

import cv2
import numpy as np

from .colors import THEMES, get_theme
from .config import ChartConfig
from .interactions import MouseTracker, hit_test, process_key, save_screenshot
from .platform_utils import apply_platform_fixes, normalize_key
from .points import DataPoint, PlacedPoint, PointLike, coerce_points, default_points
from .renderer import Renderer
from .scene import Scene, build_scene
from .text import BUNDLES
from .tooltip import TooltipController

logger = logging.getLogger(__name__)


class TimelineChart:
    """
    Interactive premium-payment timeline.

    Quick Start:
        from timeline_chart import TimelineChart, ChartConfig

        chart = TimelineChart(config=ChartConfig(language="en"))
        chart.show()                    # blocking window, Q to quit

    Headless:
        chart = TimelineChart(points)
        chart.tap(x, y)                 # toggle the tooltip under (x, y)
        img = chart.render()            # H×W×3 uint8 BGR
        scene = chart.scene()           # path, placed points, marks
    """

    def __init__(self, points: Optional[Iterable[PointLike]] = None,
                 config: Optional[ChartConfig] = None, *,
                 window_name: str = "Timeline"):
        self._config = config or ChartConfig()
        self._window_name = window_name
        self._points: list[DataPoint] = []
        self.set_data(points)

        self._tooltip = TooltipController()
        self._renderer = Renderer(self._config)
        self._mouse = MouseTracker()
        self._window_created = False
        self._theme_cycle = list(THEMES.keys())

    # ──────────────────────────────────────────────────────
    # Inputs
    # ──────────────────────────────────────────────────────
    def set_data(self, points: Optional[Iterable[PointLike]]) -> 'TimelineChart':
        """Replace the data. None or empty falls back to the sample schedule."""
        data = coerce_points(points)
        self._points = data if data else default_points()
        return self

    def set_language(self, language: str) -> 'TimelineChart':
        self._config = replace(self._config, language=language)
        return self

    def set_theme(self, theme_name: str) -> 'TimelineChart':
        """Switch theme by name. Raises KeyError for unknown themes."""
        self._renderer.theme = get_theme(theme_name)
        self._config = replace(self._config, theme=theme_name)
        return self

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def points(self) -> list[DataPoint]:
        return list(self._points)

    @property
    def tooltip(self) -> TooltipController:
        return self._tooltip

    # ──────────────────────────────────────────────────────
    # Layout + render
    # ──────────────────────────────────────────────────────
    def scene(self) -> Scene:
        return build_scene(self._points, self._config, tooltip=self._tooltip)

    def render(self) -> np.ndarray:
        return self._renderer.render(self.scene())

    @property
    def canvas(self) -> np.ndarray:
        """Last rendered image (H×W×3 uint8 BGR)."""
        return self._renderer.canvas

    # ──────────────────────────────────────────────────────
    # Interaction
    # ──────────────────────────────────────────────────────
    def tap(self, x: float, y: float) -> Optional[PlacedPoint]:
        """Toggle the tooltip of the point under (x, y). Returns that point."""
        scene = self.scene()
        hit = hit_test(scene.points, x, y, scene.geometry.hit_radius)
        if hit is not None:
            self._tooltip.toggle(hit.id)
        return hit

    def toggle_language(self) -> str:
        langs = list(BUNDLES.keys())
        current = self._config.language if self._config.language in langs else langs[0]
        nxt = langs[(langs.index(current) + 1) % len(langs)]
        self.set_language(nxt)
        return nxt

    # ──────────────────────────────────────────────────────
    # Window loop
    # ──────────────────────────────────────────────────────
    def show(self) -> None:
        """Open an OpenCV window and run until Q/ESC or the window closes."""
        apply_platform_fixes()
        self._ensure_window()
        try:
            img = self.render()
            while True:
                cv2.imshow(self._window_name, img)
                key = normalize_key(cv2.waitKey(30))

                dirty = False
                for x, y in self._mouse.pop_taps():
                    dirty = self.tap(x, y) is not None or dirty

                if self._handle_key(key):
                    break
                if key >= 0:
                    dirty = True
                if self._window_closed():
                    break
                if dirty:
                    img = self.render()
        finally:
            self.close()

    def _handle_key(self, key: int) -> bool:
        """Process keyboard input. Returns True on quit."""
        action = process_key(key)
        if action.quit:
            return True
        if action.screenshot:
            save_screenshot(self._renderer.canvas, self._config.screenshot_dir)
        if action.cycle_theme:
            idx = (self._theme_cycle.index(self._config.theme) + 1
                   if self._config.theme in self._theme_cycle else 0)
            self.set_theme(self._theme_cycle[idx % len(self._theme_cycle)])
        if action.toggle_language:
            logger.info("Language: %s", self.toggle_language())
        if action.clear_tooltip:
            self._tooltip.clear()
        return False

    def _ensure_window(self) -> None:
        if not self._window_created:
            cv2.namedWindow(self._window_name, cv2.WINDOW_AUTOSIZE)
            # Qt backend needs one event loop iteration before the window
            # handle is valid for setMouseCallback.
            cv2.waitKey(1)
            self._window_created = True
        if self._config.enable_tooltips and not self._mouse.attached:
            self._mouse.attach(self._window_name)

    def _window_closed(self) -> bool:
        return cv2.getWindowProperty(self._window_name, cv2.WND_PROP_VISIBLE) < 1

    def close(self) -> None:
        """Destroy the window if one was opened."""
        if self._window_created:
            cv2.destroyWindow(self._window_name)
            self._window_created = False
            self._mouse = MouseTracker()
