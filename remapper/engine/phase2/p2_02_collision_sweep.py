"""P2.02 — Collision Sweep.

Sweep flow layers left to right by mapped x and push each one right until it
clears its predecessor by ``padding``. Locked layers are skipped: they neither
move nor act as obstacles, so a flow layer may still end up on top of one.
Those remaining overlaps are reported as diagnostics.
"""

from __future__ import annotations

import logging

from remapper.engine.context import RemapContext
from remapper.engine.phase2.p2_01_slot_distribution import flow_candidate_indices
from remapper.engine.registry import Phase, phase_step
from remapper.models.layers import TransformedLayer
from remapper.utils.geometry import bbox_overlap_area, place_layer

logger = logging.getLogger(__name__)


def resolve_collisions(
    layers: list[TransformedLayer],
    locked_ids: set[str],
    *,
    padding: float = 10.0,
) -> list[TransformedLayer]:
    """Return a new top-level list where consecutive flow layers keep ``padding`` apart."""
    result = list(layers)
    order = sorted(flow_candidate_indices(result, locked_ids), key=lambda i: result[i].coords.x)
    if len(order) < 2:
        return result

    prev = result[order[0]]
    for i in order[1:]:
        curr = result[i]
        min_x = prev.coords.x + prev.coords.w + padding
        if curr.coords.x < min_x:
            logger.debug("Shifted '%s' right by %.2f", curr.id, min_x - curr.coords.x)
            result[i] = place_layer(curr, x=min_x)
        prev = result[i]
    return result


def locked_overlaps(layers: list[TransformedLayer], locked_ids: set[str]) -> list[tuple[str, str]]:
    """(flow id, locked id) pairs whose boxes intersect."""
    flow = [layers[i] for i in flow_candidate_indices(layers, locked_ids)]
    locked = [layer for layer in layers if layer.id in locked_ids]
    pairs: list[tuple[str, str]] = []
    for f in flow:
        fb = (f.coords.x, f.coords.y, f.coords.right, f.coords.bottom)
        for lk in locked:
            lb = (lk.coords.x, lk.coords.y, lk.coords.right, lk.coords.bottom)
            if bbox_overlap_area(fb, lb) > 0:
                pairs.append((f.id, lk.id))
    return pairs


@phase_step(
    id="P2.02",
    phase=Phase.LAYOUT,
    dependencies=["P1.01"],
    description="Push overlapping flow layers apart",
)
def collision_sweep(ctx: RemapContext) -> None:
    ctx.layers = resolve_collisions(ctx.layers, ctx.locked_ids, padding=ctx.config.collision_padding)
    for flow_id, locked_id in locked_overlaps(ctx.layers, ctx.locked_ids):
        ctx.diagnostics.append(f"flow layer '{flow_id}' overlaps locked layer '{locked_id}'")
