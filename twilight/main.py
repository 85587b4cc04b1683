import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from twilight.core.config import Settings, get_settings
from twilight.core.db import Database
from twilight.core.errors import register_error_handlers
from twilight.core.log import add_request_logging, configure_logging, log_routes
from twilight.routes.users import router as users_router
from twilight.routes.tweets import router as tweets_router
from twilight.routes.hashtags import router as hashtags_router
from twilight.routes.health import router as health_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if database is None and settings.database_url:
        database = Database(settings.database_url)
    if database is None:
        # The app can still start, but any DB access will fail until DATABASE_URL is set.
        logger.warning("DATABASE_URL is not set")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.database is not None:
            app.state.database.create_all()
        log_routes(app)
        yield
        if app.state.database is not None:
            app.state.database.engine.dispose()

    app = FastAPI(title="Twilight API", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.public_frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_request_logging(app)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(tweets_router)
    app.include_router(hashtags_router)
    return app


app = create_app()
