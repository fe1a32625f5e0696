from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import health_router, router
from logging_config import configure_logging
from services.query_service import build_default_service
from settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    service = build_default_service()
    try:
        yield
    finally:
        service.shutdown()
        build_default_service.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()
    app = FastAPI(
        title="GNSS Station API",
        description="Latest readings and decoded coordinates for a fleet of GNSS stations.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.include_router(health_router)
    return app

app = create_app()
