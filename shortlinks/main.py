from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from shortlinks.api import health, links
from shortlinks.core.config import Settings, settings as default_settings
from shortlinks.core.errors import ConflictError, NotFoundError, StoreError, ValidationError
from shortlinks.core.logging_config import configure_logging
from shortlinks.db import database
from shortlinks.db.models import Base

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the FastAPI application around one database engine.

    The engine and session factory live in app.state; request handlers get
    their session through database.get_db.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    if engine is None:
        engine = database.build_engine(settings.database_url)

    Base.metadata.create_all(bind=engine)
    logger.info("Database models initialized/checked.")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")
        yield
        logger.info("Shutting down gracefully...")
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="URL shortener with per-link click counters",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = database.build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    app.include_router(health.router)
    app.include_router(links.router)
    app.include_router(links.redirect_router)

    register_exception_handlers(app)
    return app


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.warning(f"404: {exc}")
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "URL not found"})

    @app.exception_handler(ConflictError)
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: Exception):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Server error"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Server error"})
