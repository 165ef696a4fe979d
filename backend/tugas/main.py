# backend/tugas/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tugas.api.endpoints import health
from tugas.api.endpoints.web import auth, pages, tasks
from tugas.core.config import Settings, settings
from tugas.core.errors import AppError, app_error_handler
from tugas.core.logging_setup import setup_logging
from tugas.core.session import MongoSessionMiddleware
from tugas.core.static import LayeredStaticFiles
from tugas.db.mongo import close_mongo_connection, connect_to_mongo, ensure_indexes

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, database=None) -> FastAPI:
    """
    Build the application.

    `database` is an already-open database handle (tests pass an in-memory one).
    When it is None, the lifespan opens a Motor client from app_settings and
    closes it on shutdown.
    """

    # open Motor unless a handle was injected
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if app.state.db is None:
            client, app.state.db = connect_to_mongo(app_settings)
        await ensure_indexes(app.state.db)
        yield
        close_mongo_connection(client)

    app = FastAPI(title="Tugas Tracker", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.db = database

    app.add_exception_handler(AppError, app_error_handler)

    # --- middleware ---

    # 1. CORS, only when origins are configured
    if app_settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # 2. Session: signed cookie -> document in the 'sessions' collection
    app.add_middleware(
        MongoSessionMiddleware,
        secret_key=app_settings.SESSION_SECRET,
        session_cookie=app_settings.SESSION_COOKIE,
        max_age=app_settings.SESSION_MAX_AGE,
        https_only=app_settings.IS_PRODUCTION,
        same_site="lax",
        path="/",
    )

    # JSON API
    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(health.router)

    # HTML entry points, then every other file from public/ and pages/
    app.include_router(pages.router)
    app.mount(
        "/",
        LayeredStaticFiles(
            directories=[app_settings.PUBLIC_DIR, app_settings.PAGES_DIR],
            html=True,
        ),
        name="static",
    )

    return app


app = create_app()


def run() -> None:
    setup_logging(settings.LOG_LEVEL)
    logger.info("Server listening on port %s (%s)", settings.PORT, settings.ENVIRONMENT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
