"""Strategy and feedback models, the two sources of per-layer overrides.

A strategy is computed upstream (the engine never generates one). Feedback is
a reviewer's correction and always outranks the strategy for the same layer.
Unknown ``method`` / ``layoutMode`` values are coerced to the no-op defaults so
newer producers do not break older engines.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from pydantic import Field, field_validator

from remapper.models.base import RemapModel

logger = logging.getLogger(__name__)


class LayoutMethod(str, enum.Enum):
    GEOMETRIC = "GEOMETRIC"
    GENERATIVE = "GENERATIVE"
    HYBRID = "HYBRID"

    @property
    def is_generative(self) -> bool:
        return self in (LayoutMethod.GENERATIVE, LayoutMethod.HYBRID)


class LayoutMode(str, enum.Enum):
    NONE = "NONE"
    GRID = "GRID"
    DISTRIBUTE_HORIZONTAL = "DISTRIBUTE_HORIZONTAL"
    DISTRIBUTE_VERTICAL = "DISTRIBUTE_VERTICAL"


def _coerce_enum(value: Any, enum_cls: type[enum.Enum], default: enum.Enum) -> Any:
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Unrecognized %s value %r, falling back to %s",
            enum_cls.__name__,
            value,
            default.value,
        )
        return default


class LayerOverride(RemapModel):
    layer_id: str
    x_offset: float | None = None
    y_offset: float | None = None
    individual_scale: float | None = Field(None, ge=0)
    rotation: float | None = None
    layout_role: str | None = None
    linked_anchor_id: str | None = None
    cited_rule: str | None = None


class PhysicsRules(RemapModel):
    prevent_overlap: bool = False


class LayoutStrategy(RemapModel):
    method: LayoutMethod = LayoutMethod.GEOMETRIC
    suggested_scale: float | None = Field(None, ge=0)
    layout_mode: LayoutMode = LayoutMode.NONE
    overrides: list[LayerOverride] = Field(default_factory=list)
    replace_layer_id: str | None = None
    generative_prompt: str | None = None
    physics_rules: PhysicsRules | None = None
    source_reference: str | None = None
    triangulation: dict[str, Any] | None = None
    timestamp: int | None = None
    is_explicit_intent: bool = False

    @field_validator("method", mode="before")
    @classmethod
    def _known_method(cls, value: Any) -> Any:
        return _coerce_enum(value, LayoutMethod, LayoutMethod.GEOMETRIC)

    @field_validator("layout_mode", mode="before")
    @classmethod
    def _known_layout_mode(cls, value: Any) -> Any:
        return _coerce_enum(value, LayoutMode, LayoutMode.NONE)

    @property
    def prevent_overlap(self) -> bool:
        return self.physics_rules is not None and self.physics_rules.prevent_overlap


class Feedback(RemapModel):
    overrides: list[LayerOverride] = Field(default_factory=list)
    is_committed: bool = False
