"""Pipeline orchestrator — runs remap steps in dependency order with strategy gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from remapper.engine.context import RemapContext
from remapper.engine.registry import Phase, StepRegistry, get_registry
from remapper.models.strategy import LayoutMode

logger = logging.getLogger(__name__)

_PHASE_PACKAGES = ["phase0", "phase1", "phase2", "phase3"]


class Pipeline:
    """Orchestrates the remap steps.

    Unlike an analysis pipeline, a failing step is not recorded and skipped:
    every step feeds the payload, so its exception reaches the caller.
    """

    def __init__(self, registry: StepRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: RemapContext) -> RemapContext:
        """Run all applicable steps on the given context."""
        start = time.perf_counter()

        skip_ids = self._strategy_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.debug(
            "Pipeline: %d steps queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            spec.fn(ctx)
            ctx.completed_steps.add(spec.id)
            logger.debug("  %s completed in %.2fms", spec.id, (time.perf_counter() - t0) * 1000)

        logger.info(
            "Remap %s -> %s: %d layers, %d steps in %.1fms",
            ctx.source.container.name,
            ctx.target.name,
            len(ctx.layers),
            len(ctx.completed_steps),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def run_phase(self, ctx: RemapContext, phase: Phase) -> RemapContext:
        """Run only the steps of one phase. Earlier phases must already have run."""
        for spec in self.registry.get_phase(phase):
            spec.fn(ctx)
            ctx.completed_steps.add(spec.id)
        return ctx

    def _strategy_gate(self, ctx: RemapContext) -> set[str]:
        """Determine which layout steps the strategy leaves idle.

        - No layout mode (or NONE): skip slot distribution
        - No preventOverlap rule: skip the collision sweep
        """
        skip: set[str] = set()
        strategy = ctx.strategy

        if strategy is None or strategy.layout_mode == LayoutMode.NONE:
            skip.add("P2.01")  # Slot distribution
        if strategy is None or not strategy.prevent_overlap:
            skip.add("P2.02")  # Collision sweep

        return skip


def register_steps() -> None:
    """Import all phase modules so @phase_step decorators fire."""
    for package_name in _PHASE_PACKAGES:
        package = importlib.import_module(f"remapper.engine.{package_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


def create_pipeline() -> Pipeline:
    """Factory function for creating a pipeline over the registered steps."""
    register_steps()
    return Pipeline()
