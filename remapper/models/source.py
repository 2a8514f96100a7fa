"""Resolved channel inputs handed to the engine by its host."""

from __future__ import annotations

from pydantic import Field

from remapper.models.base import RemapModel
from remapper.models.geometry import Container
from remapper.models.layers import Layer
from remapper.models.strategy import Feedback, LayoutStrategy


class MappingContext(RemapModel):
    """The source side of a channel: container, layers and strategy."""

    container: Container
    layers: list[Layer] = Field(default_factory=list)
    ai_strategy: LayoutStrategy | None = None
    preview_url: str | None = None


class Channel(RemapModel):
    """One source→target pairing. Either side may still be unresolved."""

    index: int = 0
    source: MappingContext | None = None
    target: Container | None = None
    feedback: Feedback | None = None

    @property
    def output_key(self) -> str:
        return f"result-out-{self.index}"
