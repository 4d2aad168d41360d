from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from gym_tracker.api.errors import register_exception_handlers
from gym_tracker.api.exercises import router as exercises_router
from gym_tracker.api.health import router as health_router
from gym_tracker.api.progress import router as progress_router
from gym_tracker.core.config import get_cors_origins, get_database_url, get_log_level
from gym_tracker.db.session import build_engine, build_session_factory, init_db
from gym_tracker.middleware.request_logging import RequestLoggingMiddleware
from gym_tracker.web.pages import router as pages_router

STATIC_DIR = Path(__file__).resolve().parent / "static"

logger = logging.getLogger("gym_tracker")


def create_app(database_url: str | None = None) -> FastAPI:
    logging.basicConfig(level=get_log_level())
    engine = build_engine(database_url or get_database_url())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info("store_ready url=%s", engine.url.render_as_string(hide_password=True))
        yield
        engine.dispose()

    app = FastAPI(title="Gym Progress Tracker", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    cors_origins = get_cors_origins()
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=False,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "X-Request-ID"],
        )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(exercises_router)
    app.include_router(progress_router)
    app.include_router(pages_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    return app


app = create_app()
