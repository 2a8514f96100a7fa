"""POST /api/remap: remap one channel, or many independent channels."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from remapper.dependencies import get_pipeline
from remapper.engine.pipeline import Pipeline
from remapper.engine.remap import remap, remap_channels
from remapper.models.requests import ChannelsRequest, RemapRequest
from remapper.models.responses import ChannelsResponse, RemapResponse

router = APIRouter()


@router.post("/remap", response_model=RemapResponse)
async def remap_one(req: RemapRequest, pipeline: Pipeline = Depends(get_pipeline)) -> RemapResponse:
    start = time.perf_counter()

    # DegenerateContainer propagates to the app's 422 handler
    payload = remap(req.source, req.target, req.feedback, pipeline=pipeline)

    elapsed = (time.perf_counter() - start) * 1000
    return RemapResponse(
        status="idle" if payload is None else "success",
        payload=payload,
        processing_time_ms=round(elapsed, 3),
    )


@router.post("/remap/channels", response_model=ChannelsResponse)
async def remap_many(req: ChannelsRequest, pipeline: Pipeline = Depends(get_pipeline)) -> ChannelsResponse:
    start = time.perf_counter()
    results = remap_channels(req.channels, pipeline=pipeline)
    elapsed = (time.perf_counter() - start) * 1000
    return ChannelsResponse(results=results, processing_time_ms=round(elapsed, 3))
