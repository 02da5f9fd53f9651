from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

from timeline_chart.core import TimelineChart
from timeline_chart.config import ChartConfig
from timeline_chart.geometry import resolve_geometry
from timeline_chart.interactions import (
    MouseTracker, hit_test, process_key, save_screenshot,
)
from timeline_chart.platform_utils import normalize_key
from timeline_chart.points import DataPoint, place_points


def _placed(n):
    g = resolve_geometry(980, 280, 40, n)
    return place_points([DataPoint(id=str(i)) for i in range(n)], g)


def test_hit_test_inside_and_outside_radius():
    placed = _placed(3)
    assert hit_test(placed, 40, 160, 16).id == "0"
    assert hit_test(placed, 40 + 15, 160 + 5, 16).id == "0"
    assert hit_test(placed, 40 + 20, 160, 16) is None
    assert hit_test([], 0, 0, 16) is None


def test_hit_test_prefers_nearest_then_last():
    placed = place_points([DataPoint(id="a"), DataPoint(id="b")],
                          resolve_geometry(980, 280, 40, 2))
    overlapping = [placed[0], placed[0].__class__(id="c", x=50.0, y=160.0)]
    assert hit_test(overlapping, 44, 160, 16).id == "a"
    assert hit_test(overlapping, 46, 160, 16).id == "c"
    assert hit_test(overlapping, 45, 160, 16).id == "c"


def test_mouse_tracker_collects_left_clicks_only():
    tracker = MouseTracker()
    tracker._callback(cv2.EVENT_MOUSEMOVE, 1, 1, 0, None)
    tracker._callback(cv2.EVENT_LBUTTONDOWN, 10, 20, 0, None)
    assert tracker.pop_taps() == [(10, 20)]
    assert tracker.pop_taps() == []
    assert not tracker.attached


@pytest.mark.parametrize("key,field", [
    (ord("q"), "quit"), (27, "quit"), (ord("s"), "screenshot"),
    (ord("t"), "cycle_theme"), (ord("l"), "toggle_language"),
    (ord("c"), "clear_tooltip"),
])
def test_process_key(key, field):
    assert getattr(process_key(key), field) is True


def test_process_key_ignores_no_key():
    action = process_key(-1)
    assert not any(vars(action).values())


def test_normalize_key_masks_modifier_bits():
    assert normalize_key(0x100071) == ord("q")
    assert normalize_key(-1) == -1


def test_save_screenshot(tmp_path):
    canvas = np.zeros((10, 20, 3), dtype=np.uint8)
    path = Path(save_screenshot(canvas, str(tmp_path / "shots")))
    assert path.exists()
    assert path.suffix == ".png"
    assert cv2.imread(str(path)).shape == (10, 20, 3)


# ────────────────────────────────────────────────────────────
# TimelineChart (headless)
# ────────────────────────────────────────────────────────────
def test_chart_uses_sample_data_when_empty():
    chart = TimelineChart([])
    assert len(chart.points) == 10


def test_chart_tap_toggles_tooltip():
    chart = TimelineChart(config=ChartConfig(language="en"))
    hit = chart.tap(940, 160)
    assert hit.id == "90"
    assert chart.scene().active_tooltip.text == "150,000"

    chart.tap(40, 160)
    assert chart.tooltip.active_id == "1"
    assert chart.scene().active_tooltip is None     # no value or note

    chart.tap(40, 160)
    assert chart.tooltip.is_idle


def test_chart_tap_on_empty_space_keeps_state():
    chart = TimelineChart(config=ChartConfig(language="en"))
    chart.tap(940, 160)
    assert chart.tap(500, 20) is None
    assert chart.tooltip.active_id == "90"


def test_chart_language_and_theme_switching():
    chart = TimelineChart(config=ChartConfig(language="th"))
    assert chart.toggle_language() == "en"
    assert chart.scene().text.language == "en"
    chart.set_theme("dark")
    assert chart.config.theme == "dark"
    with pytest.raises(KeyError):
        chart.set_theme("neon")


def test_chart_key_handling_without_window(tmp_path):
    chart = TimelineChart(config=ChartConfig(language="en",
                                             screenshot_dir=str(tmp_path)))
    chart.render()
    chart.tap(940, 160)
    assert chart._handle_key(ord("c")) is False
    assert chart.tooltip.is_idle
    assert chart._handle_key(ord("t")) is False
    assert chart.config.theme == "dark"
    assert chart._handle_key(ord("s")) is False
    assert list(tmp_path.glob("timeline_*.png"))
    assert chart._handle_key(ord("q")) is True


def test_chart_render_returns_canvas():
    chart = TimelineChart()
    img = chart.render()
    assert img.shape == (280, 980, 3)
    assert chart.canvas is img
