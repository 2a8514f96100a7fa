"""API request models."""

from __future__ import annotations

from pydantic import Field

from remapper.models.base import RemapModel
from remapper.models.geometry import Container
from remapper.models.source import Channel, MappingContext
from remapper.models.strategy import Feedback


class RemapRequest(RemapModel):
    source: MappingContext | None = Field(None, description="Resolved source content, if connected")
    target: Container | None = Field(None, description="Target container, if connected")
    feedback: Feedback | None = Field(None, description="Reviewer corrections for this channel")


class ChannelsRequest(RemapModel):
    channels: list[Channel] = Field(..., description="Independent source→target pairings")
