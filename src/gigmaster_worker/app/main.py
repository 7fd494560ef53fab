from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from ..services.library import LibraryLoader
from ..services.orchestrator import SongOrchestrator
from .routes import router
from .settings import get_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI instance."""
    settings = get_settings()
    loader = LibraryLoader(settings)
    orchestrator = SongOrchestrator(settings, loader)

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            library = await orchestrator.load_library()
            logger.info("Worker warmup complete: {}", library.sizes())
        except Exception:  # noqa: BLE001
            logger.exception("Worker warmup failed")
        yield

    app = FastAPI(title="GigMaster Worker", version="0.1.0", lifespan=_lifespan)
    app.state.settings = settings
    app.state.library_loader = loader
    app.state.orchestrator = orchestrator
    app.include_router(router)
    return app


app = create_app()
