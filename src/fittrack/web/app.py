"""FastAPI application for the fittrack web interface."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import Settings, configure_logging
from ..metrics import format_total_time
from ..store import StoreClient
from ..utils.exercise_utils import (
    difficulty_badge,
    format_long_date,
    format_number,
    format_short_date,
)
from .routers import api, dashboard, exercises, progress, workouts

logger = logging.getLogger(__name__)

# Template and static file paths
TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

# Transient notices shown after an action, keyed by query parameter value
NOTICES = {
    "workout_created": "Workout created successfully!",
    "workout_deleted": "Workout deleted",
    "exercise_added": "Exercise added!",
    "exercise_removed": "Exercise removed",
    "progress_logged": "Progress recorded!",
}

ERRORS = {
    "load_failed": "Failed to load data",
    "create_failed": "Failed to create workout",
    "delete_failed": "Failed to delete workout",
    "add_failed": "Failed to add exercise",
    "remove_failed": "Failed to remove exercise",
    "save_failed": "Failed to save progress",
    "invalid_input": "Please check the values you entered",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the store client for the application's lifetime."""
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = StoreClient(app.state.settings)
        logger.info("Connected store client to %s", app.state.settings.store_url)
    yield
    if owns_store:
        await app.state.store.aclose()
        app.state.store = None


def create_app(settings: Settings | None = None, store: StoreClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        store: An existing store client; when omitted the application
            creates one on startup and closes it on shutdown
    """
    if settings is None:
        settings = Settings.from_env()
        configure_logging(settings.log_level)

    app = FastAPI(
        title="fittrack",
        description="Workout logging and progress tracking",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.filters["short_date"] = format_short_date
    templates.env.filters["long_date"] = format_long_date
    templates.env.filters["number"] = format_number
    templates.env.filters["total_time"] = format_total_time
    templates.env.filters["difficulty_badge"] = difficulty_badge
    templates.env.globals["NOTICES"] = NOTICES
    templates.env.globals["ERRORS"] = ERRORS
    app.state.templates = templates

    app.include_router(dashboard.router)
    app.include_router(workouts.router)
    app.include_router(exercises.router)
    app.include_router(progress.router)
    app.include_router(api.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
