import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from taskboard.core.config import Settings, settings as default_settings
from taskboard.core.handlers import register_exception_handlers
from taskboard.core.logging_setup import setup_logging
from taskboard.core.rate_limit import RateLimitMiddleware
from taskboard.db.session import Database
from taskboard.routers import articles, checklists, daily_tasks, dashboard, health, progress_reports, projects, tasks

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

API_ROUTERS = (
    health.router,
    tasks.router,
    articles.router,
    checklists.router,
    projects.router,
    daily_tasks.router,
    progress_reports.router,
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.DB_PATH)
        # A failure here aborts startup; nothing is served against a broken store.
        db.init()
        app.state.db = db
        logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
        try:
            yield
        finally:
            db.close()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.RATE_LIMIT_MAX,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        path_prefix=settings.API_PREFIX,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, debug=settings.ENVIRONMENT == "development")

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    for router in API_ROUTERS:
        app.include_router(router, prefix=settings.API_PREFIX)
    app.include_router(dashboard.router)

    return app


app = create_app()
