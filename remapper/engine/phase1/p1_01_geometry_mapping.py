"""P1.01 — Geometry Mapping.

Map every layer of the source tree from source-container space into
target-container space, depth-first, parent before children.

Scale policy is "contain": the uniform scale is min(target/source) per axis so
the whole source fits without clipping. A strategy's suggestedScale multiplies
that uniform scale. The whole scaled source is centered in the target; every
layer of the pass (children included) shares the same base scale.

A resolved override then shifts the layer by (xOffset, yOffset), scales it by
individualScale about its own center, and sets its rotation.
"""

from __future__ import annotations

from dataclasses import dataclass

from remapper.engine.config import RemapConfig
from remapper.engine.context import RemapContext
from remapper.engine.errors import DegenerateContainer
from remapper.engine.phase0.p0_01_container_validation import require_area
from remapper.engine.registry import Phase, phase_step
from remapper.engine.resolver.override_resolver import resolve_override
from remapper.models.geometry import Bounds, Container, Rect
from remapper.models.layers import Layer, LayerTransform, TransformedLayer
from remapper.models.strategy import Feedback, LayerOverride, LayoutStrategy
from remapper.utils.geometry import is_finite, scale_about_center


def compute_base_scale(
    source: Container,
    target: Container,
    strategy: LayoutStrategy | None = None,
) -> float:
    """Contain-fit scale, multiplied by the strategy's suggestedScale when set."""
    require_area(source, "source")
    require_area(target, "target")
    return _fit_scale(source, target, strategy)


def _fit_scale(
    source: Container,
    target: Container,
    strategy: LayoutStrategy | None,
) -> float:
    src, tgt = source.bounds, target.bounds
    uniform = min(tgt.w / src.w, tgt.h / src.h)
    if not is_finite(uniform):
        raise DegenerateContainer(
            f"scale from '{source.name}' to '{target.name}' is not finite", source.name
        )
    if strategy is None or not strategy.suggested_scale:
        return uniform

    scale = uniform * strategy.suggested_scale
    if not is_finite(scale):
        raise DegenerateContainer(
            f"suggested scale {strategy.suggested_scale} overflows the '{target.name}' fit",
            target.name,
        )
    return scale


@dataclass(frozen=True)
class _Frame:
    """Per-pass constants shared by every layer of the tree."""

    source: Bounds
    target: Bounds
    base_scale: float
    # Centers the whole scaled source inside the target
    offset_x: float
    offset_y: float
    strategy: LayoutStrategy | None
    feedback: Feedback | None
    config: RemapConfig


def _pick(override: LayerOverride | None, layer: Layer, attr: str) -> str | None:
    if override is not None and getattr(override, attr) is not None:
        return getattr(override, attr)
    return getattr(layer, attr)


def _map_layer(layer: Layer, frame: _Frame) -> TransformedLayer:
    s = frame.base_scale
    x = (layer.coords.x - frame.source.x) * s + frame.offset_x + frame.target.x
    y = (layer.coords.y - frame.source.y) * s + frame.offset_y + frame.target.y
    w = layer.coords.w * s
    h = layer.coords.h * s

    override = resolve_override(layer.id, frame.feedback, frame.strategy)
    individual = 1.0
    rotation = 0.0
    if override is not None:
        x += override.x_offset or 0.0
        y += override.y_offset or 0.0
        if override.individual_scale is not None:
            individual = override.individual_scale
        x, y, w, h = scale_about_center(x, y, w, h, individual)
        rotation = override.rotation or 0.0

    if not is_finite(x, y, w, h):
        raise DegenerateContainer(f"layer '{layer.id}' mapped to non-finite geometry")

    strategy = frame.strategy
    promoted = (
        strategy is not None
        and strategy.method.is_generative
        and strategy.replace_layer_id == layer.id
    )

    children = None
    if layer.children is not None:
        children = [_map_layer(child, frame) for child in layer.children]

    return TransformedLayer(
        id=layer.id,
        type=frame.config.generative_layer_type if promoted else layer.type,
        name=layer.name,
        coords=Rect(x=x, y=y, w=w, h=h),
        transform=LayerTransform(
            scale_x=s * individual,
            scale_y=s * individual,
            offset_x=x,
            offset_y=y,
            rotation=rotation,
        ),
        children=children,
        layout_role=_pick(override, layer, "layout_role"),
        linked_anchor_id=_pick(override, layer, "linked_anchor_id"),
        cited_rule=_pick(override, layer, "cited_rule"),
        generative_prompt=strategy.generative_prompt if promoted else None,
    )


def map_layers(
    layers: list[Layer],
    source: Container,
    target: Container,
    strategy: LayoutStrategy | None = None,
    feedback: Feedback | None = None,
    *,
    base_scale: float | None = None,
    config: RemapConfig | None = None,
) -> list[TransformedLayer]:
    """Map a layer tree into the target container. One new node per input node.

    ``base_scale`` is computed from the containers unless the caller already has it.
    """
    if base_scale is None:
        base_scale = compute_base_scale(source, target, strategy)
    src, tgt = source.bounds, target.bounds
    frame = _Frame(
        source=src,
        target=tgt,
        base_scale=base_scale,
        offset_x=(tgt.w - src.w * base_scale) / 2,
        offset_y=(tgt.h - src.h * base_scale) / 2,
        strategy=strategy,
        feedback=feedback,
        config=config or RemapConfig(),
    )
    return [_map_layer(layer, frame) for layer in layers]


@phase_step(
    id="P1.01",
    phase=Phase.MAPPING,
    dependencies=["P0.01"],
    description="Map layer tree into target-container space",
)
def geometry_mapping(ctx: RemapContext) -> None:
    # P0.01 already validated both containers
    ctx.base_scale = _fit_scale(ctx.source.container, ctx.target, ctx.strategy)
    ctx.layers = map_layers(
        ctx.source.layers,
        ctx.source.container,
        ctx.target,
        ctx.strategy,
        ctx.feedback,
        base_scale=ctx.base_scale,
        config=ctx.config,
    )
    ctx.locked_ids = {
        layer.id
        for layer in ctx.layers
        if resolve_override(layer.id, ctx.feedback, ctx.strategy) is not None
    }
