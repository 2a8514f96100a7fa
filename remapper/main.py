"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from remapper.config import settings
from remapper.engine.errors import DegenerateContainer
from remapper.engine.pipeline import register_steps

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.remapper_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


async def _degenerate_container_handler(request: Request, exc: DegenerateContainer) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "detail": str(exc), "container": exc.container},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Layout Remapper",
        description="Layer tree remapping engine that fits design layers into differently-sized containers",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DegenerateContainer, _degenerate_container_handler)

    # Import all step modules to trigger registration
    register_steps()

    from remapper.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
