"""Shared test fixtures."""

from __future__ import annotations

import pytest

from remapper.models.geometry import Container, Rect
from remapper.models.layers import Layer, LayerTransform, TransformedLayer
from remapper.models.source import MappingContext


def _layer(id: str, x: float, y: float, w: float, h: float, **kwargs) -> Layer:
    return Layer(id=id, coords=Rect(x=x, y=y, w=w, h=h), **kwargs)


def _mapped(id: str, x: float, y: float, w: float, h: float, **kwargs) -> TransformedLayer:
    """A layer as the mapper would emit it: offsets equal to the final position."""
    return TransformedLayer(
        id=id,
        coords=Rect(x=x, y=y, w=w, h=h),
        transform=LayerTransform(offset_x=x, offset_y=y),
        **kwargs,
    )


@pytest.fixture
def make_layer():
    return _layer


@pytest.fixture
def make_mapped():
    return _mapped


@pytest.fixture
def source_container() -> Container:
    # 100x100 artboard at the origin
    return Container(name="Square", bounds=Rect(x=0, y=0, w=100, h=100))


@pytest.fixture
def square_target() -> Container:
    return Container(name="Large", bounds=Rect(x=10, y=10, w=200, h=200))


@pytest.fixture
def wide_target() -> Container:
    return Container(name="Banner", bounds=Rect(x=10, y=10, w=400, h=200))


@pytest.fixture
def single_layer_source(source_container) -> MappingContext:
    return MappingContext(container=source_container, layers=[_layer("logo", 0, 0, 50, 50)])


@pytest.fixture
def three_layer_source(source_container) -> MappingContext:
    return MappingContext(
        container=source_container,
        layers=[
            _layer("title", 10, 10, 30, 10),
            _layer("badge", 40, 40, 20, 20),
            _layer("cta", 60, 80, 30, 10),
        ],
    )
