from __future__ import annotations

import pytest

from timeline_chart.config import ChartConfig
from timeline_chart.points import DataPoint, default_points


@pytest.fixture
def sample_points() -> list[DataPoint]:
    return default_points()


@pytest.fixture
def scenario_config() -> ChartConfig:
    return ChartConfig(
        width=980,
        height=280,
        margin_horizontal=40,
        zigzag_segments=frozenset({4, 5, 7}),
        zigzag_amplitude=35,
        language="en",
    )
