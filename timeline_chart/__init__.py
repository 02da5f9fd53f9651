"""
timeline_chart — Premium-payment timeline layout and OpenCV renderer
=====================================================================

Quick Start:
    from timeline_chart import build_scene, ChartConfig, DataPoint

    scene = build_scene(
        [DataPoint(id="1", year="1"), DataPoint(id="90", year="A90",
                   value="150,000", last_payment=True)],
        ChartConfig(language="en"),
    )
    scene.path.d        # "M 40 160 L ..."
    scene.points        # PlacedPoint(x, y, index, ...)
    scene.marks         # captions, callout, arrows (z-ordered)

Interactive:
    from timeline_chart import TimelineChart
    TimelineChart().show()

Keyboard Shortcuts:
    Q/ESC  → Quit          S → Screenshot
    T      → Cycle theme   L → Toggle language
    C      → Close tooltip
"""

__version__ = "1.0.0"

import logging as _logging

# ── Early platform fix ──────────────────────────────────────
# Must run BEFORE importing cv2, which initializes Qt backend.
# OpenCV's bundled Qt may lack the Wayland plugin; force xcb (XWayland).
import os as _os
import platform as _platform
if (_platform.system() == 'Linux'
        and _os.environ.get('XDG_SESSION_TYPE', '').lower() == 'wayland'
        and 'QT_QPA_PLATFORM' not in _os.environ):
    _os.environ['QT_QPA_PLATFORM'] = 'xcb'
del _os, _platform

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Configuration
from .config import ChartConfig, SegmentPolicy

# Colors & themes
from .colors import (
    Theme, LIGHT_THEME, DARK_THEME,
    get_theme, register_theme, hex_to_bgr,
)

# Layout pipeline
from .geometry import GeometryConfig, resolve_geometry, fit_width
from .points import DataPoint, PlacedPoint, place_points, default_points
from .path import ChartPath, PathBuilder, PathSegment
from .text import TextBundle, get_text_bundle
from .annotations import AnnotationPlanner, Layer
from .tooltip import Tooltip, TooltipController
from .scene import Scene, build_scene, render_scene

# Rendering & interaction
from .renderer import Renderer
from .interactions import hit_test, save_screenshot, process_key
from .core import TimelineChart

__all__ = [
    # Core
    "TimelineChart",
    # Config
    "ChartConfig", "SegmentPolicy",
    # Colors
    "Theme", "LIGHT_THEME", "DARK_THEME",
    "get_theme", "register_theme", "hex_to_bgr",
    # Layout
    "GeometryConfig", "resolve_geometry", "fit_width",
    "DataPoint", "PlacedPoint", "place_points", "default_points",
    "ChartPath", "PathBuilder", "PathSegment",
    "TextBundle", "get_text_bundle",
    "AnnotationPlanner", "Layer",
    "Tooltip", "TooltipController",
    "Scene", "build_scene", "render_scene",
    # Rendering & interaction
    "Renderer", "hit_test", "save_screenshot", "process_key",
]
