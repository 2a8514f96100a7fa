"""API response models."""

from __future__ import annotations

from pydantic import Field

from remapper.models.base import RemapModel
from remapper.models.payload import ChannelResult, TransformedPayload


class HealthResponse(RemapModel):
    status: str = "ok"
    version: str = "0.1.0"
    steps_registered: int = 0


class RemapResponse(RemapModel):
    status: str = "success"  # success, idle
    payload: TransformedPayload | None = None
    processing_time_ms: float = 0.0


class ChannelsResponse(RemapModel):
    results: list[ChannelResult] = Field(default_factory=list)
    processing_time_ms: float = 0.0
