from __future__ import annotations

import logging

import pytest

from timeline_chart.annotations import Layer
from timeline_chart.config import ChartConfig, SegmentPolicy
from timeline_chart.points import DataPoint
from timeline_chart.scene import build_scene, render_scene
from timeline_chart.text import BUNDLES, DEFAULT_LANGUAGE, get_text_bundle
from timeline_chart.tooltip import TooltipController


def test_scenario_scene(sample_points, scenario_config):
    scene = build_scene(sample_points, scenario_config)

    assert len(scene.points) == 10
    assert scene.geometry.zigzag_amplitude == 35
    assert scene.path.start == (40.0, 160.0)
    assert scene.path.end == (940.0, 160.0)
    kinds = {s.index: s.kind for s in scene.path.segments}
    assert {i for i, k in kinds.items() if k == "zigzag"} == {4, 5, 7}

    (value,) = scene.marks_of("callout_value")
    assert (value.x, value.text) == (940.0, "150,000")


def test_marks_are_sorted_by_layer(sample_points):
    tooltip = TooltipController("90")
    scene = build_scene(sample_points, ChartConfig(language="en"), tooltip=tooltip)
    layers = [m.layer for m in scene.marks]
    assert layers == sorted(layers)
    assert scene.layer(Layer.TOOLTIP)
    assert scene.marks[-1].layer == Layer.ARROWS


@pytest.mark.parametrize("points", [[], None])
def test_empty_input_draws_only_decorations(points):
    scene = build_scene(points, ChartConfig(language="en"))
    assert scene.points == ()
    assert scene.path.is_empty
    assert scene.tooltips == {}
    assert scene.active_tooltip is None
    assert {m.kind for m in scene.marks} == {
        "title", "subtitle", "axis_label", "side_arrow", "side_arrow_head"}


def test_tooltip_visibility_in_scene(sample_points):
    scene = build_scene(sample_points, ChartConfig(language="en"),
                        tooltip=TooltipController("90"))
    assert scene.tooltips["90"] is True
    assert sum(scene.tooltips.values()) == 1
    assert scene.active_tooltip.text == "150,000"
    assert scene.marks_of("tooltip_box")


def test_disabled_tooltips_hide_everything(sample_points):
    config = ChartConfig(language="en", enable_tooltips=False)
    scene = build_scene(sample_points, config, tooltip=TooltipController("90"))
    assert not any(scene.tooltips.values())
    assert scene.active_tooltip is None
    assert not scene.layer(Layer.TOOLTIP)


def test_unsupported_language_falls_back(sample_points, caplog):
    with caplog.at_level(logging.WARNING, logger="timeline_chart.text"):
        scene = build_scene(sample_points, ChartConfig(language="fr"))
    default = BUNDLES[DEFAULT_LANGUAGE]
    assert scene.text == default
    assert scene.marks_of("title")[0].text == default.coverage
    assert scene.marks_of("subtitle")[0].text == default.subtitle
    assert scene.marks_of("callout_caption")[0].text == default.premium_end
    assert "fr" in caplog.text


@pytest.mark.parametrize("tag", ["en", "EN", " en "])
def test_language_tag_is_normalized(tag):
    assert get_text_bundle(tag).language == "en"


def test_alternating_policy_through_config():
    points = [DataPoint(id=str(i)) for i in range(3)]
    config = ChartConfig(segment_policy=SegmentPolicy.ALTERNATING,
                         zigzag_amplitude=12)
    scene = build_scene(points, config)
    ys = [s.vertices[0][1] for s in scene.path.segments]
    assert ys == [148.0, 172.0]


def test_accepts_mappings():
    scene = build_scene([{"id": "a"}, {"id": "b", "value": "1", "lastPayment": True}],
                        ChartConfig(language="en"))
    assert [p.id for p in scene.points] == ["a", "b"]
    assert scene.marks_of("callout")


def test_render_scene_keyword_entry_point():
    scene = render_scene(
        [DataPoint(id="only", value="5")],
        canvas_width=600, canvas_height=200, margin_horizontal=30,
        stroke_color="#000000", point_fill_color="#ffffff",
        language_tag="en", active_id="only",
    )
    assert scene.points[0].x == 30
    assert scene.points[0].y == 120
    assert scene.config.stroke_bgr == (0, 0, 0)
    assert scene.tooltips == {"only": True}


def test_scene_is_pure(sample_points):
    config = ChartConfig(language="en")
    assert build_scene(sample_points, config) == build_scene(sample_points, config)
