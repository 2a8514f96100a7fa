"""RemapContext — the single mutable state object flowing through all steps.

Inputs are read-only for the steps. Mapping results land in ``layers``; the
layout phase replaces entries of that list, never mutates them.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from remapper.engine.config import RemapConfig
from remapper.models.geometry import Bounds, Container
from remapper.models.layers import TransformedLayer
from remapper.models.payload import TransformedPayload
from remapper.models.source import MappingContext
from remapper.models.strategy import Feedback, LayoutStrategy


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RemapContext:
    """Shared state for one source→target remap invocation."""

    source: MappingContext
    target: Container
    feedback: Feedback | None = None
    config: RemapConfig = field(default_factory=RemapConfig)
    # Version stamp fallback when the strategy carries no timestamp
    clock: Callable[[], int] = now_ms

    # --- Computed by the mapping phase ---
    base_scale: float = 1.0
    layers: list[TransformedLayer] = field(default_factory=list)
    # Top-level layers with a resolved override; the layout phase skips them
    locked_ids: set[str] = field(default_factory=set)

    # --- Output ---
    payload: TransformedPayload | None = None

    # --- Pipeline metadata ---
    completed_steps: set[str] = field(default_factory=set)
    diagnostics: list[str] = field(default_factory=list)

    @property
    def strategy(self) -> LayoutStrategy | None:
        return self.source.ai_strategy

    @property
    def source_bounds(self) -> Bounds:
        return self.source.container.bounds

    @property
    def target_bounds(self) -> Bounds:
        return self.target.bounds
