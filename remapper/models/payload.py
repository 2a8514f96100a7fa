"""Engine output: the single immutable payload per source→target pairing."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from remapper.models.base import FrozenRemapModel
from remapper.models.geometry import Bounds, SizeMetrics
from remapper.models.layers import TransformedLayer


class TransformedPayload(FrozenRemapModel):
    status: str = "success"
    source_container: str
    target_container: str
    layers: list[TransformedLayer] = Field(default_factory=list)
    scale_factor: float = 1.0
    metrics: SizeMetrics
    target_bounds: Bounds
    is_confirmed: bool = False
    requires_generation: bool = False
    preview_url: str | None = None
    source_reference: str | None = None
    generation_id: int = 0
    triangulation: dict[str, Any] | None = None
    # Non-fatal findings: unknown or duplicate override targets, flow/locked overlaps
    diagnostics: list[str] = Field(default_factory=list)


class ChannelResult(FrozenRemapModel):
    """Outcome of one channel: success with a payload, idle, or a typed error."""

    index: int
    output_key: str
    status: str  # success, idle, error
    payload: TransformedPayload | None = None
    error: str | None = None
    detail: str | None = None
