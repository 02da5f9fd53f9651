"""
Interactions — Tap hit-testing, mouse tracking, keyboard shortcuts, screenshots.

Keyboard Shortcuts (cross-platform):
=====================================
  Q / ESC  — Quit
  S        — Save screenshot (PNG)
  T        — Cycle theme (light → dark → ...)
  L        — Toggle language (th ↔ en)
  C        — Close the open tooltip
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import cv2
import numpy as np

from .points import PlacedPoint

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────
# Hit testing
# ────────────────────────────────────────────────────────────
def hit_test(points: Sequence[PlacedPoint], x: float, y: float,
             radius: float) -> Optional[PlacedPoint]:
    """
    Point whose circular hit region contains (x, y).

    Overlapping regions resolve to the nearest center; equal distances to the
    later point, which is the one drawn on top.
    """
    if not points:
        return None
    centers = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    dist = np.hypot(centers[:, 0] - x, centers[:, 1] - y)
    # argmin returns the first minimum; search reversed to prefer the last
    idx = len(dist) - 1 - int(np.argmin(dist[::-1]))
    if dist[idx] > radius:
        return None
    return points[idx]


# ────────────────────────────────────────────────────────────
# Mouse State
# ────────────────────────────────────────────────────────────
class MouseTracker:
    """
    Collects left-button taps inside an OpenCV window.

    OpenCV mouse callbacks run on the HighGUI thread, same as the thread
    that called cv2.waitKey(), so taps are drained from that thread too.
    """

    def __init__(self):
        self._taps: list[tuple[int, int]] = []
        self._attached_window: Optional[str] = None

    def attach(self, window_name: str) -> None:
        """Register mouse callback for a named window."""
        self._attached_window = window_name
        cv2.setMouseCallback(window_name, self._callback)

    def _callback(self, event: int, x: int, y: int,
                  flags: int, param) -> None:
        if event == cv2.EVENT_LBUTTONDOWN:
            self._taps.append((x, y))

    def pop_taps(self) -> list[tuple[int, int]]:
        """Return and clear the taps collected since the last call."""
        taps, self._taps = self._taps, []
        return taps

    @property
    def attached(self) -> bool:
        return self._attached_window is not None


# ────────────────────────────────────────────────────────────
# Screenshot
# ────────────────────────────────────────────────────────────
def save_screenshot(canvas: np.ndarray, directory: str = ".") -> str:
    """
    Save current canvas as PNG with timestamp filename.

    Returns the full path of the saved file.
    """
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    filename = path / f"timeline_{timestamp}.png"
    if not cv2.imwrite(str(filename), canvas):
        raise OSError(f"Could not write screenshot to {filename}")
    logger.info("Saved screenshot %s", filename)
    return str(filename)


# ────────────────────────────────────────────────────────────
# Keyboard Action Dispatcher
# ────────────────────────────────────────────────────────────
@dataclass
class KeyAction:
    """Result of processing a key press."""
    quit: bool = False
    screenshot: bool = False
    cycle_theme: bool = False
    toggle_language: bool = False
    clear_tooltip: bool = False


def process_key(key: int) -> KeyAction:
    """Map a normalized 8-bit key code to an action."""
    action = KeyAction()
    if key < 0:
        return action

    if key == ord('q') or key == 27:       # Q or ESC
        action.quit = True
    elif key == ord('s'):
        action.screenshot = True
    elif key == ord('t'):
        action.cycle_theme = True
    elif key == ord('l'):
        action.toggle_language = True
    elif key == ord('c'):
        action.clear_tooltip = True

    return action
