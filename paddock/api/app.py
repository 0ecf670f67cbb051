"""FastAPI application.

Serves widget view models as JSON. Initializes the database on startup.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from paddock import __version__
from paddock.api.routes import cache, settings, widgets
from paddock.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    logger.info("[STARTUP] Paddock %s ready", __version__)
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Paddock", version=__version__, lifespan=lifespan)
    app.include_router(widgets.router, tags=["widgets"])
    app.include_router(cache.router, tags=["cache"])
    app.include_router(settings.router, tags=["settings"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
