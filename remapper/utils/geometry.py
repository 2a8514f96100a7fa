"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from remapper.models.layers import TransformedLayer


def is_finite(*values: float) -> bool:
    """True when no value is NaN or infinite."""
    return bool(np.all(np.isfinite(np.asarray(values, dtype=np.float64))))


def scale_about_center(
    x: float, y: float, w: float, h: float, factor: float
) -> tuple[float, float, float, float]:
    """Resize a box by ``factor`` keeping its center point fixed."""
    cx = x + w / 2
    cy = y + h / 2
    new_w = w * factor
    new_h = h * factor
    return (cx - new_w / 2, cy - new_h / 2, new_w, new_h)


def slot_centers(origin: float, extent: float, count: int, margin_fraction: float) -> NDArray[np.float64]:
    """Centers of ``count`` equal slots across ``extent`` minus a margin on each side.

    Slot i is centered at origin + margin + step*i + step/2.
    """
    margin = extent * margin_fraction
    step = (extent - 2 * margin) / count
    return origin + margin + step * np.arange(count) + step / 2


def bbox_overlap_area(
    a: tuple[float, float, float, float],
    b: tuple[float, float, float, float],
) -> float:
    """Overlap area of two (xmin, ymin, xmax, ymax) boxes."""
    x_overlap = max(0.0, min(a[2], b[2]) - max(a[0], b[0]))
    y_overlap = max(0.0, min(a[3], b[3]) - max(a[1], b[1]))
    return x_overlap * y_overlap


def place_layer(
    layer: TransformedLayer,
    *,
    x: float | None = None,
    y: float | None = None,
) -> TransformedLayer:
    """Copy of ``layer`` moved to (x, y); coords and transform offsets move together."""
    coords = layer.coords
    new_x = coords.x if x is None else float(x)
    new_y = coords.y if y is None else float(y)
    transform = layer.transform
    return layer.model_copy(
        update={
            "coords": coords.model_copy(update={"x": new_x, "y": new_y}),
            "transform": transform.model_copy(
                update={
                    "offset_x": transform.offset_x + (new_x - coords.x),
                    "offset_y": transform.offset_y + (new_y - coords.y),
                }
            ),
        }
    )
