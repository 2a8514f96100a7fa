"""Layer trees: source layers in, transformed layers out."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import Field

from remapper.models.base import FrozenRemapModel, RemapModel
from remapper.models.geometry import Rect

FLOW_ROLE = "flow"


class Layer(RemapModel):
    """A design layer authored in source-container space."""

    id: str
    type: str = "layer"  # layer, group, generative, ...
    name: str | None = None
    coords: Rect
    children: list[Layer] | None = None
    layout_role: str | None = None
    linked_anchor_id: str | None = None
    cited_rule: str | None = None


class LayerTransform(FrozenRemapModel):
    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    rotation: float = 0.0


class TransformedLayer(FrozenRemapModel):
    """A layer after remapping. ``coords`` are in target-container space."""

    id: str
    type: str = "layer"
    name: str | None = None
    coords: Rect
    transform: LayerTransform = Field(default_factory=LayerTransform)
    children: list[TransformedLayer] | None = None
    layout_role: str | None = None
    linked_anchor_id: str | None = None
    cited_rule: str | None = None
    generative_prompt: str | None = None

    @property
    def is_flow(self) -> bool:
        return self.layout_role is None or self.layout_role == FLOW_ROLE


def iter_layer_ids(layers: list[Layer] | None) -> Iterator[str]:
    """Yield every id in a layer tree, depth-first, parent before children."""
    for layer in layers or []:
        yield layer.id
        yield from iter_layer_ids(layer.children)
