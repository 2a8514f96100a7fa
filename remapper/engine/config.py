"""Remap configuration: solver tunables."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RemapConfig:
    """Constants for the flow layout solver and layer promotion."""

    # Slot distribution: margin on each side, as a fraction of the target extent
    flow_margin_fraction: float = 0.05

    # Collision sweep: minimum gap between neighbouring flow layers
    collision_padding: float = 10.0

    # Type assigned to the layer a generative strategy marks for replacement
    generative_layer_type: str = "generative"
