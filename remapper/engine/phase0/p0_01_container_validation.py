"""P0.01 — Container Validation.

Reject containers that would make the scale undefined, and report overrides
that point at layers the tree does not contain.
"""

from __future__ import annotations

import logging

from remapper.engine.context import RemapContext
from remapper.engine.errors import DegenerateContainer
from remapper.engine.registry import Phase, phase_step
from remapper.engine.resolver.override_resolver import override_diagnostics
from remapper.models.geometry import Container
from remapper.models.layers import iter_layer_ids
from remapper.utils.geometry import is_finite

logger = logging.getLogger(__name__)


def require_area(container: Container, role: str) -> None:
    """Raise DegenerateContainer unless the container has a positive, finite size."""
    b = container.bounds
    if not is_finite(b.x, b.y, b.w, b.h):
        raise DegenerateContainer(
            f"{role} container '{container.name}' has non-finite bounds", container.name
        )
    if b.w <= 0 or b.h <= 0:
        raise DegenerateContainer(
            f"{role} container '{container.name}' has degenerate size {b.w}x{b.h}",
            container.name,
        )


@phase_step(
    id="P0.01",
    phase=Phase.VALIDATION,
    description="Validate container bounds and override targets",
)
def container_validation(ctx: RemapContext) -> None:
    require_area(ctx.source.container, "source")
    require_area(ctx.target, "target")

    layer_ids = set(iter_layer_ids(ctx.source.layers))
    for message in override_diagnostics(layer_ids, ctx.feedback, ctx.strategy):
        logger.warning("%s -> %s: %s", ctx.source.container.name, ctx.target.name, message)
        ctx.diagnostics.append(message)
