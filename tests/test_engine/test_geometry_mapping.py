"""Tests for geometry mapping from source into target space."""

import pytest

from remapper.engine.errors import DegenerateContainer
from remapper.engine.phase1.p1_01_geometry_mapping import compute_base_scale, map_layers
from remapper.models.geometry import Bounds, Container, Rect
from remapper.models.strategy import Feedback, LayerOverride, LayoutMethod, LayoutStrategy

ORIGIN_TARGET = Container(name="T", bounds=Rect(x=0, y=0, w=200, h=200))


def test_contain_fit_square_target(source_container, square_target, make_layer):
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, square_target)
    assert (out.coords.x, out.coords.y, out.coords.w, out.coords.h) == (10, 10, 100, 100)
    assert out.transform.scale_x == 2
    assert out.transform.scale_y == 2
    assert out.transform.offset_x == 10
    assert out.transform.rotation == 0


def test_contain_fit_centers_wide_target(source_container, wide_target, make_layer):
    assert compute_base_scale(source_container, wide_target) == 2
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, wide_target)
    assert out.coords.x == 110
    assert out.coords.y == 10
    assert out.coords.w == 100


def test_suggested_scale_multiplies_uniform_scale(source_container, make_layer):
    strategy = LayoutStrategy(suggested_scale=0.5)
    assert compute_base_scale(source_container, ORIGIN_TARGET, strategy) == 1
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, ORIGIN_TARGET, strategy)
    # Scaled source is 100x100, centered in 200x200
    assert (out.coords.x, out.coords.y, out.coords.w) == (50, 50, 50)


def test_source_origin_is_subtracted(make_layer):
    source = Container(name="S", bounds=Rect(x=50, y=50, w=100, h=100))
    [out] = map_layers([make_layer("a", 60, 50, 10, 10)], source, ORIGIN_TARGET)
    assert out.coords.x == 20
    assert out.coords.y == 0


def test_individual_scale_keeps_center(source_container, make_layer):
    strategy = LayoutStrategy(overrides=[LayerOverride(layer_id="a", individual_scale=0.5)])
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, ORIGIN_TARGET, strategy)
    assert (out.coords.w, out.coords.h) == (50, 50)
    assert out.coords.center == (50, 50)
    assert out.transform.scale_x == 1.0


def test_offsets_then_scale_about_center(source_container, make_layer):
    feedback = Feedback(
        overrides=[LayerOverride(layer_id="a", x_offset=5, y_offset=-3, individual_scale=2, rotation=90)]
    )
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, ORIGIN_TARGET, None, feedback)
    assert out.coords.w == 200
    assert out.coords.center == pytest.approx((55, 47))
    assert out.transform.offset_x == out.coords.x
    assert out.transform.rotation == 90


def test_override_without_scale_or_rotation(source_container, make_layer):
    strategy = LayoutStrategy(overrides=[LayerOverride(layer_id="a", x_offset=7)])
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, ORIGIN_TARGET, strategy)
    assert (out.coords.x, out.coords.y, out.coords.w) == (7, 0, 100)
    assert out.transform.rotation == 0


def test_feedback_outranks_strategy_in_mapping(source_container, make_layer):
    strategy = LayoutStrategy(overrides=[LayerOverride(layer_id="a", x_offset=100)])
    feedback = Feedback(overrides=[LayerOverride(layer_id="a", x_offset=1)])
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, ORIGIN_TARGET, strategy, feedback)
    assert out.coords.x == 1


def test_override_metadata_replaces_layer_metadata(source_container, make_layer):
    strategy = LayoutStrategy(
        overrides=[LayerOverride(layer_id="a", layout_role="anchor", cited_rule="rule-3")]
    )
    layer = make_layer("a", 0, 0, 10, 10, layout_role="flow", linked_anchor_id="logo")
    [out] = map_layers([layer], source_container, ORIGIN_TARGET, strategy)
    assert out.layout_role == "anchor"
    assert out.cited_rule == "rule-3"
    assert out.linked_anchor_id == "logo"


def test_children_share_base_scale(source_container, make_layer):
    group = make_layer(
        "group",
        0,
        0,
        100,
        100,
        type="group",
        children=[make_layer("child", 10, 10, 20, 20), make_layer("leaf", 0, 0, 5, 5)],
    )
    feedback = Feedback(overrides=[LayerOverride(layer_id="leaf", x_offset=3)])
    [out] = map_layers([group], source_container, ORIGIN_TARGET, None, feedback)
    child, leaf = out.children
    assert (child.coords.x, child.coords.y, child.coords.w, child.coords.h) == (20, 20, 40, 40)
    assert child.transform.scale_x == 2
    assert leaf.coords.x == 3
    assert child.children is None
    assert out.type == "group"


def test_generative_promotion_only_on_replaced_layer(source_container, make_layer):
    strategy = LayoutStrategy(
        method=LayoutMethod.HYBRID,
        replace_layer_id="bg",
        generative_prompt="extend the sky",
    )
    layers = [make_layer("bg", 0, 0, 100, 100), make_layer("logo", 10, 10, 20, 20)]
    bg, logo = map_layers(layers, source_container, ORIGIN_TARGET, strategy)
    assert bg.type == "generative"
    assert bg.generative_prompt == "extend the sky"
    assert logo.type == "layer"
    assert logo.generative_prompt is None


def test_geometric_strategy_never_promotes(source_container, make_layer):
    strategy = LayoutStrategy(replace_layer_id="bg", generative_prompt="ignored")
    [bg] = map_layers([make_layer("bg", 0, 0, 100, 100)], source_container, ORIGIN_TARGET, strategy)
    assert bg.type == "layer"
    assert bg.generative_prompt is None


@pytest.mark.parametrize(
    "bounds",
    [
        Rect(x=0, y=0, w=0, h=100),
        Rect(x=0, y=0, w=100, h=0),
        Rect(x=float("inf"), y=0, w=10, h=10),
        Bounds(x=0, y=0, w=-5, h=100),
    ],
)
def test_degenerate_source_raises(bounds, make_layer):
    source = Container(name="Broken", bounds=bounds)
    with pytest.raises(DegenerateContainer) as exc_info:
        map_layers([make_layer("a", 0, 0, 10, 10)], source, ORIGIN_TARGET)
    assert exc_info.value.container == "Broken"


def test_degenerate_target_raises(source_container, make_layer):
    target = Container(name="Flat", bounds=Rect(x=0, y=0, w=300, h=0))
    with pytest.raises(DegenerateContainer):
        map_layers([make_layer("a", 0, 0, 10, 10)], source_container, target)


def test_mapping_is_idempotent(source_container, wide_target, make_layer):
    layers = [make_layer("a", 5, 5, 50, 50, children=[make_layer("b", 10, 10, 5, 5)])]
    strategy = LayoutStrategy(overrides=[LayerOverride(layer_id="b", individual_scale=1.5)])
    first = map_layers(layers, source_container, wide_target, strategy)
    second = map_layers(layers, source_container, wide_target, strategy)
    assert first == second


def test_overflowing_fit_scale_raises(make_layer):
    source = Container(name="Speck", bounds=Rect(x=0, y=0, w=1e-300, h=1e-300))
    target = Container(name="Huge", bounds=Rect(x=0, y=0, w=1e300, h=1e300))
    with pytest.raises(DegenerateContainer, match="not finite"):
        compute_base_scale(source, target)
    with pytest.raises(DegenerateContainer):
        map_layers([], source, target)


def test_overflowing_suggested_scale_raises(source_container):
    target = Container(name="Huge", bounds=Rect(x=0, y=0, w=1e300, h=1e300))
    strategy = LayoutStrategy(suggested_scale=1e300)
    with pytest.raises(DegenerateContainer) as exc_info:
        compute_base_scale(source_container, target, strategy)
    assert exc_info.value.container == "Huge"


def test_given_base_scale_is_used_as_is(source_container, square_target, make_layer):
    [out] = map_layers([make_layer("a", 0, 0, 50, 50)], source_container, square_target, base_scale=1)
    # 100x100 scaled source centered in 200x200 at (10, 10)
    assert (out.coords.x, out.coords.w) == (60, 50)
    assert out.transform.scale_x == 1
