"""Layout remapping engine: override resolution, geometry mapping, flow layout."""

from remapper.engine.registry import phase_step, Phase, get_registry
from remapper.engine.context import RemapContext
from remapper.engine.errors import DegenerateContainer, MissingInput, RemapError
from remapper.engine.pipeline import Pipeline, create_pipeline
from remapper.engine.remap import remap, remap_channels

__all__ = [
    "phase_step",
    "Phase",
    "get_registry",
    "RemapContext",
    "DegenerateContainer",
    "MissingInput",
    "RemapError",
    "Pipeline",
    "create_pipeline",
    "remap",
    "remap_channels",
]
