"""P2.01 — Slot Distribution.

Spread the top-level flow layers over equal slots along one axis of the
target. Locked layers (any resolved override) are never moved. This is slot
assignment, not collision avoidance: candidates are repositioned
unconditionally, in their original order.
"""

from __future__ import annotations

import logging

from remapper.engine.context import RemapContext
from remapper.engine.registry import Phase, phase_step
from remapper.models.geometry import Bounds
from remapper.models.layers import TransformedLayer
from remapper.models.strategy import LayoutMode
from remapper.utils.geometry import place_layer, slot_centers

logger = logging.getLogger(__name__)


def flow_candidate_indices(layers: list[TransformedLayer], locked_ids: set[str]) -> list[int]:
    """Positions of layers the solver may move: unlocked, role unset or "flow"."""
    return [i for i, layer in enumerate(layers) if layer.id not in locked_ids and layer.is_flow]


def distribute_flow(
    layers: list[TransformedLayer],
    target: Bounds,
    mode: LayoutMode,
    locked_ids: set[str],
    *,
    margin_fraction: float = 0.05,
) -> list[TransformedLayer]:
    """Return a new top-level list with flow candidates centered in their slots.

    GRID is laid out as a single row, like DISTRIBUTE_HORIZONTAL.
    """
    result = list(layers)
    if mode not in (LayoutMode.GRID, LayoutMode.DISTRIBUTE_HORIZONTAL, LayoutMode.DISTRIBUTE_VERTICAL):
        return result

    indices = flow_candidate_indices(result, locked_ids)
    if not indices:
        return result

    if mode == LayoutMode.DISTRIBUTE_VERTICAL:
        centers = slot_centers(target.y, target.h, len(indices), margin_fraction)
        for i, cy in zip(indices, centers):
            result[i] = place_layer(result[i], y=cy - result[i].coords.h / 2)
    else:
        centers = slot_centers(target.x, target.w, len(indices), margin_fraction)
        for i, cx in zip(indices, centers):
            result[i] = place_layer(result[i], x=cx - result[i].coords.w / 2)

    logger.debug("Distributed %d flow layers (%s)", len(indices), mode.value)
    return result


@phase_step(
    id="P2.01",
    phase=Phase.LAYOUT,
    dependencies=["P1.01"],
    description="Distribute flow layers over equal slots",
)
def slot_distribution(ctx: RemapContext) -> None:
    if ctx.strategy is None:
        return
    ctx.layers = distribute_flow(
        ctx.layers,
        ctx.target_bounds,
        ctx.strategy.layout_mode,
        ctx.locked_ids,
        margin_fraction=ctx.config.flow_margin_fraction,
    )
