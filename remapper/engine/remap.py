"""Recompute entry points. The host calls these whenever an input changes.

``remap`` is a pure function of its arguments: it reads no host state and
keeps no cache, so independent channels can be remapped in parallel.
"""

from __future__ import annotations

import logging
from typing import Callable

from remapper.engine.config import RemapConfig
from remapper.engine.context import RemapContext, now_ms
from remapper.engine.errors import MissingInput, RemapError
from remapper.engine.pipeline import Pipeline, create_pipeline
from remapper.models.geometry import Container
from remapper.models.payload import ChannelResult, TransformedPayload
from remapper.models.source import Channel, MappingContext
from remapper.models.strategy import Feedback

logger = logging.getLogger(__name__)


def remap(
    source: MappingContext | None,
    target: Container | None,
    feedback: Feedback | None = None,
    *,
    config: RemapConfig | None = None,
    clock: Callable[[], int] = now_ms,
    pipeline: Pipeline | None = None,
    strict: bool = False,
) -> TransformedPayload | None:
    """Remap ``source`` into ``target``.

    Returns None while either side is unresolved (idle, not an error), or
    raises MissingInput when ``strict`` is set.
    Raises DegenerateContainer for zero-sized containers.
    """
    if source is None or target is None:
        missing = "source" if source is None else "target"
        if strict:
            raise MissingInput(f"{missing} is not resolved")
        logger.debug("Remap idle: %s unresolved", missing)
        return None

    ctx = RemapContext(
        source=source,
        target=target,
        feedback=feedback,
        config=config or RemapConfig(),
        clock=clock,
    )
    (pipeline or create_pipeline()).run(ctx)
    return ctx.payload


def remap_channels(
    channels: list[Channel],
    *,
    config: RemapConfig | None = None,
    clock: Callable[[], int] = now_ms,
    pipeline: Pipeline | None = None,
) -> list[ChannelResult]:
    """Remap each channel independently; one failing channel never blocks the rest."""
    pipeline = pipeline or create_pipeline()
    results: list[ChannelResult] = []
    for channel in channels:
        try:
            payload = remap(
                channel.source,
                channel.target,
                channel.feedback,
                config=config,
                clock=clock,
                pipeline=pipeline,
            )
        except RemapError as e:
            logger.warning("Channel %s FAILED: %s", channel.output_key, e)
            results.append(
                ChannelResult(
                    index=channel.index,
                    output_key=channel.output_key,
                    status="error",
                    error=type(e).__name__,
                    detail=str(e),
                )
            )
            continue

        results.append(
            ChannelResult(
                index=channel.index,
                output_key=channel.output_key,
                status="idle" if payload is None else "success",
                payload=payload,
            )
        )
    return results
