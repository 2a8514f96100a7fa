"""Step registry — every remap step is a standalone function registered via decorator.

Usage:
    @phase_step(id="P2.01", phase=Phase.LAYOUT, dependencies=["P1.01"])
    def slot_distribution(ctx: RemapContext) -> None:
        ctx.layers = distribute_flow(ctx.layers, ...)

Adding a new step = creating one file with the decorator in a phase package.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from remapper.engine.context import RemapContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    VALIDATION = 0
    MAPPING = 1
    LAYOUT = 2
    ASSEMBLY = 3


@dataclass
class StepSpec:
    id: str
    phase: Phase
    fn: Callable[["RemapContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StepRegistry:
    """Singleton registry of all remap steps."""

    def __init__(self) -> None:
        self._steps: dict[str, StepSpec] = {}

    def register(self, spec: StepSpec) -> None:
        if spec.id in self._steps:
            raise ValueError(f"Duplicate step ID: {spec.id}")
        self._steps[spec.id] = spec
        logger.debug("Registered step %s (%s)", spec.id, spec.phase.name)

    def get(self, step_id: str) -> StepSpec:
        return self._steps[step_id]

    def get_phase(self, phase: Phase) -> list[StepSpec]:
        specs = [s for s in self._steps.values() if s.phase == phase]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[StepSpec]:
        return sorted(self._steps.values(), key=lambda s: (s.phase, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[StepSpec]:
        """Dependency order for the requested steps plus everything they need.

        Phases are barriers: every step also waits for all queued steps of
        earlier phases. Ties are broken by (phase, id).
        """
        needed = set(self._steps) if requested_ids is None else self._closure(requested_ids)

        pending = {
            sid: {d for d in self._steps[sid].dependencies if d in needed}
            | {o for o in needed if self._steps[o].phase < self._steps[sid].phase}
            for sid in needed
        }
        ready = [(self._steps[sid].phase, sid) for sid, deps in pending.items() if not deps]
        heapq.heapify(ready)
        ordered: list[StepSpec] = []

        while ready:
            _, sid = heapq.heappop(ready)
            ordered.append(self._steps[sid])
            for other_id, deps in pending.items():
                if sid in deps:
                    deps.discard(sid)
                    if not deps:
                        heapq.heappush(ready, (self._steps[other_id].phase, other_id))

        if len(ordered) != len(needed):
            stuck = needed - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(stuck)}")
        return ordered

    def _closure(self, requested_ids: set[str]) -> set[str]:
        needed: set[str] = set()
        stack = [sid for sid in requested_ids if sid in self._steps]
        while stack:
            sid = stack.pop()
            if sid not in needed:
                needed.add(sid)
                stack.extend(d for d in self._steps[sid].dependencies if d in self._steps)
        return needed

    @property
    def count(self) -> int:
        return len(self._steps)


# Module-level singleton
_registry = StepRegistry()


def get_registry() -> StepRegistry:
    return _registry


def phase_step(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a remap step."""

    def decorator(fn: Callable[["RemapContext"], None]):
        spec = StepSpec(
            id=id,
            phase=phase,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
