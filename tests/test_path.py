from __future__ import annotations

import numpy as np
import pytest

from timeline_chart.config import SegmentPolicy
from timeline_chart.geometry import resolve_geometry
from timeline_chart.path import ChartPath, PathBuilder, zigzag_vertices
from timeline_chart.points import DataPoint, place_points


def _placed(n, width=980, margin=40, majors=()):
    points = [DataPoint(id=str(i), major=i in majors) for i in range(n)]
    return place_points(points, resolve_geometry(width, 280, margin, n))


def test_scenario_zigzag_segments_have_one_peak_and_one_trough():
    placed = _placed(10)
    path = PathBuilder(SegmentPolicy.INDEX, {4, 5, 7}, amplitude=35).build(placed)
    b = 160

    by_index = {s.index: s for s in path.segments}
    assert sorted(by_index) == list(range(1, 10))

    for i in (4, 5, 7):
        seg = by_index[i]
        assert seg.kind == "zigzag"
        ys = [y for _, y in seg.vertices]
        assert sum(1 for y in ys if y < b) == 1
        assert sum(1 for y in ys if y > b) == 1
        assert all(b - 35 <= y <= b + 35 for y in ys)
        assert seg.end == (placed[i].x, b)

    for i in (1, 2, 3, 6, 8, 9):
        seg = by_index[i]
        assert seg.kind == "straight"
        assert seg.vertices == ((placed[i].x, b),)


def test_zigzag_numeric_contract():
    verts = zigzag_vertices(340.0, 440.0, 160.0, 35.0)
    xs = [x for x, _ in verts]
    ys = [y for _, y in verts]

    lead = 100 / 6
    step = (100 - 2 * lead) / 6
    assert xs[0] == pytest.approx(340 + lead)
    assert xs[1] == pytest.approx(340 + lead + step)
    assert xs[3] == pytest.approx(340 + lead + 3 * step)
    assert xs[-2] == pytest.approx(440 - lead)
    assert xs[-1] == 440.0
    assert ys == [160, 125, 160, 195, 160, 160, 160]
    assert xs == sorted(xs)


def test_amplitude_sets_peak_and_trough_depth():
    placed = _placed(10)
    low = PathBuilder(amplitude=20).build(placed)
    high = PathBuilder(amplitude=35).build(placed)
    assert low.d != high.d

    seg = {s.index: s for s in high.segments}[4]
    ys = [y for _, y in seg.vertices]
    assert (min(ys), max(ys)) == (125.0, 195.0)


def test_zigzag_peak_and_trough_sit_at_amplitude():
    verts = zigzag_vertices(0.0, 600.0, 100.0, 10.0)
    ys = [y for _, y in verts]
    assert min(ys) == 90.0
    assert max(ys) == 110.0
    assert verts[0] == (10.0, 100.0)


@pytest.mark.parametrize("length", [0.0, 1.0, 5.0, 59.9])
def test_short_segments_degrade_without_negative_offsets(length):
    verts = zigzag_vertices(100.0, 100.0 + length, 50.0, 10.0)
    xs = [x for x, _ in verts]
    assert all(100.0 <= x <= 100.0 + length for x in xs)
    assert xs == sorted(xs)
    assert verts[-1] == (100.0 + length, 50.0)
    assert all(40.0 <= y <= 60.0 for _, y in verts)


def test_path_starts_and_ends_on_points():
    placed = _placed(10)
    path = PathBuilder(amplitude=20).build(placed)
    assert path.start == (placed[0].x, placed[0].y)
    assert path.end == (placed[-1].x, placed[-1].y)
    assert path.d.startswith("M 40 160 L ")
    assert path.d.endswith("L 940 160")


def test_path_x_never_goes_backwards():
    placed = _placed(10)
    path = PathBuilder(SegmentPolicy.INDEX, range(1, 10), amplitude=20).build(placed)
    xs = path.vertices[:, 0]
    assert np.all(np.diff(xs) >= 0)


def test_vertices_array_matches_commands():
    placed = _placed(3)
    path = PathBuilder(SegmentPolicy.INDEX, set(), amplitude=20).build(placed)
    assert path.vertices.shape == (3, 2)
    assert path.vertices.dtype == np.float64
    assert [op for op, _, _ in path.commands] == ["M", "L", "L"]


def test_empty_and_single_point_paths():
    assert PathBuilder().build([]) == ChartPath()
    assert ChartPath().d == ""
    assert ChartPath().is_empty
    assert ChartPath().vertices.shape == (0, 2)

    single = PathBuilder().build(_placed(1))
    assert single.d == "M 40 160"
    assert single.start == single.end == (40.0, 160.0)
    assert single.segments == ()


def test_alternating_policy_flips_direction_by_parity():
    placed = _placed(4)
    path = PathBuilder(SegmentPolicy.ALTERNATING, amplitude=10).build(placed)
    mids = [seg.vertices[0] for seg in path.segments]

    assert [s.kind for s in path.segments] == ["deflect"] * 3
    assert [y for _, y in mids] == [150.0, 170.0, 150.0]
    for seg in path.segments:
        mid_x = (seg.start[0] + seg.end[0]) / 2
        assert seg.vertices[0][0] == pytest.approx(mid_x)
        assert seg.end[1] == 160.0


def test_alternating_policy_damps_segments_next_to_major_points():
    placed = _placed(4, majors={2})
    path = PathBuilder(SegmentPolicy.ALTERNATING, amplitude=10,
                       major_damping=0.5).build(placed)
    ys = [seg.vertices[0][1] for seg in path.segments]
    assert ys == [150.0, 165.0, 155.0]


def test_alternating_policy_ignores_zigzag_set():
    builder = PathBuilder(SegmentPolicy.ALTERNATING, {1}, amplitude=10)
    assert builder.segment_kind(1) == "deflect"
    assert builder.segment_kind(2) == "deflect"


def test_policy_accepts_plain_string():
    builder = PathBuilder("alternating", amplitude=10)
    assert builder.policy is SegmentPolicy.ALTERNATING
    assert builder.segment_kind(4) == "deflect"
    with pytest.raises(ValueError):
        PathBuilder("wavy")
