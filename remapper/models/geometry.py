"""Rectangles and containers, the coordinate frames layers live in."""

from __future__ import annotations

from pydantic import Field

from remapper.models.base import FrozenRemapModel


class Bounds(FrozenRemapModel):
    """Axis-aligned box, origin top-left, y-down.

    Container bounds use this unconstrained form so a zero or negative size
    reaches container validation and fails as DegenerateContainer.
    """

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)


class Rect(Bounds):
    """Layer box. Width and height are never negative."""

    w: float = Field(0.0, ge=0)
    h: float = Field(0.0, ge=0)


class Container(FrozenRemapModel):
    name: str
    bounds: Bounds


class Size(FrozenRemapModel):
    w: float = 0.0
    h: float = 0.0


class SizeMetrics(FrozenRemapModel):
    source: Size
    target: Size
