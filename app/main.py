from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.web import router as web_router
from logging_config import configure_logging
from services.pipeline import build_default_service


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_service()
    try:
        yield
    finally:
        # The render cache lives on the service and must not outlive the app.
        build_default_service.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Sensor Chart Service",
        description="Stores temperature and humidity readings and serves a cached chart of them.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
