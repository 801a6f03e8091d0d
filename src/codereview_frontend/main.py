"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api.errors import register_error_handlers
from .api.router import router
from .config import Settings, settings
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info(f"Using code review API at {app_settings.api_base_url}")
    yield


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application around ``app_settings`` (default: environment)."""
    app = FastAPI(
        title="Code Review Frontend",
        description="Request automated code reviews and follow their progress",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings or settings

    # Mount static files if directory exists
    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.include_router(router)
    register_error_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "codereview_frontend.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
