"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from remapper.engine.registry import get_registry
from remapper.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        steps_registered=get_registry().count,
    )


@router.get("/steps")
async def steps() -> list[dict[str, str]]:
    return [
        {"id": s.id, "phase": s.phase.name, "description": s.description}
        for s in get_registry().resolve_order()
    ]
