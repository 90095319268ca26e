"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from planner import __version__
from planner.api.routes import cache, favorites, items, settings, timeline
from planner.config import get_config
from planner.services.planner import PlannerService, create_default_planner
from planner.utilities.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(planner: PlannerService | None = None) -> FastAPI:
    """Create the API app.

    Args:
        planner: Pre-built service (tests); built from config at startup if None
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if planner is None:
            config = get_config()
            setup_logging(config.log_level)
            app.state.planner = create_default_planner(config)
        else:
            app.state.planner = planner
        logger.info("Planner API started")
        yield
        await app.state.planner.aclose()
        logger.info("Planner API stopped")

    app = FastAPI(title="Planner", version=__version__, lifespan=lifespan)
    if planner is not None:
        app.state.planner = planner

    app.include_router(timeline.router, tags=["timeline"])
    app.include_router(favorites.router, tags=["favorites"])
    app.include_router(items.router, tags=["items"])
    app.include_router(settings.router, tags=["settings"])
    app.include_router(cache.router, tags=["cache"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "healthy", "version": __version__}

    return app
