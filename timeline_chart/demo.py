"""
Timeline Chart — Demo Scripts
==============================

Usage:
    python -m timeline_chart.demo                # default: English schedule
    python -m timeline_chart.demo en             # English captions
    python -m timeline_chart.demo th             # Thai captions
    python -m timeline_chart.demo alternating    # alternating deflections
    python -m timeline_chart.demo tiers          # tiered amount captions
    python -m timeline_chart.demo svg            # print the path data only

Shortcuts active in all demos:
    Q/ESC=quit  S=screenshot  T=theme  L=language  C=close tooltip
    Click a point to toggle its tooltip.
"""

from __future__ import annotations

import logging
import sys

from .config import ChartConfig, SegmentPolicy
from .core import TimelineChart
from .points import DataPoint, default_points
from .scene import build_scene


def demo_english():
    """Sample schedule with English captions."""
    TimelineChart(config=ChartConfig(language="en")).show()


def demo_thai():
    """Sample schedule with Thai captions (Hershey fonts draw '?')."""
    TimelineChart(config=ChartConfig(language="th")).show()


def demo_alternating():
    """Every segment deflects, damped next to milestone points."""
    config = ChartConfig(language="en",
                         segment_policy=SegmentPolicy.ALTERNATING,
                         zigzag_amplitude=14)
    TimelineChart(config=config).show()


def demo_tiers():
    """Amount captions stacked by level, three irregular segments."""
    points = [
        DataPoint(id="1", year="1", level=0, amount_label="12,000"),
        DataPoint(id="2", year="2", level=1, amount_label="24,000"),
        DataPoint(id="3", year="3", level=2, amount_label="36,000"),
        DataPoint(id="4", year="4", level=0, amount_label="12,000",
                  note="Premium holiday\nno payment due"),
        DataPoint(id="5", year="5"),
        DataPoint(id="6", year="6", level=1, amount_label="24,000"),
        DataPoint(id="85", year="A85", major=True, note="Maturity",
                  value="200,000", last_payment=True),
    ]
    config = ChartConfig(language="en", zigzag_segments=frozenset({2, 3, 5}),
                         height=320)
    TimelineChart(points, config).show()


def demo_svg():
    """Print the SVG path data of the sample schedule."""
    scene = build_scene(default_points(), ChartConfig(language="en"))
    print(scene.path.d)


# ────────────────────────────────────────────────────────────
# Entry point
# ────────────────────────────────────────────────────────────
DEMOS = {
    "en": demo_english,
    "th": demo_thai,
    "alternating": demo_alternating,
    "tiers": demo_tiers,
    "svg": demo_svg,
}


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    if len(sys.argv) > 1 and sys.argv[1] in DEMOS:
        DEMOS[sys.argv[1]]()
    else:
        print("Timeline Chart — Available demos:")
        print()
        for name, fn in DEMOS.items():
            doc = fn.__doc__.strip().split('\n')[0] if fn.__doc__ else ""
            print(f"  python -m timeline_chart.demo {name:12s}  →  {doc}")
        print()
        print("Running default: English schedule...")
        print("Shortcuts: [Q]uit [S]creenshot [T]heme [L]anguage [C]lose tooltip")
        print()
        demo_english()


if __name__ == "__main__":
    main()
