"""Shared pydantic base: snake_case in Python, camelCase on the wire."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RemapModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenRemapModel(BaseModel):
    """Output models. Instances are immutable once assembled."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
