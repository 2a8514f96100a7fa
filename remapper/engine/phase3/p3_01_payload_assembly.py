"""P3.01 — Payload Assembly.

Package the solved layers into the immutable TransformedPayload.
"""

from __future__ import annotations

from typing import Callable

from remapper.engine.context import RemapContext, now_ms
from remapper.engine.registry import Phase, phase_step
from remapper.models.geometry import Container, Size, SizeMetrics
from remapper.models.layers import TransformedLayer
from remapper.models.payload import TransformedPayload
from remapper.models.source import MappingContext
from remapper.models.strategy import Feedback


def assemble_payload(
    layers: list[TransformedLayer],
    source: MappingContext,
    target: Container,
    feedback: Feedback | None = None,
    *,
    base_scale: float = 1.0,
    diagnostics: list[str] | None = None,
    clock: Callable[[], int] = now_ms,
) -> TransformedPayload:
    strategy = source.ai_strategy

    # Committed feedback wins; otherwise the strategy's own explicit-intent flag
    if feedback is not None:
        is_confirmed = feedback.is_committed
    else:
        is_confirmed = strategy is not None and strategy.is_explicit_intent

    # Strategy timestamp keeps the stamp stable across recomputes of unchanged input
    if strategy is not None and strategy.timestamp is not None:
        generation_id = strategy.timestamp
    else:
        generation_id = clock()

    src, tgt = source.container.bounds, target.bounds
    return TransformedPayload(
        status="success",
        source_container=source.container.name,
        target_container=target.name,
        layers=list(layers),
        scale_factor=base_scale,
        metrics=SizeMetrics(source=Size(w=src.w, h=src.h), target=Size(w=tgt.w, h=tgt.h)),
        target_bounds=tgt,
        is_confirmed=is_confirmed,
        requires_generation=strategy is not None and strategy.method.is_generative,
        preview_url=source.preview_url,
        source_reference=strategy.source_reference if strategy else None,
        generation_id=generation_id,
        triangulation=strategy.triangulation if strategy else None,
        diagnostics=list(diagnostics or []),
    )


@phase_step(
    id="P3.01",
    phase=Phase.ASSEMBLY,
    dependencies=["P1.01"],
    description="Assemble the transformed payload",
)
def payload_assembly(ctx: RemapContext) -> None:
    ctx.payload = assemble_payload(
        ctx.layers,
        ctx.source,
        ctx.target,
        ctx.feedback,
        base_scale=ctx.base_scale,
        diagnostics=ctx.diagnostics,
        clock=ctx.clock,
    )
