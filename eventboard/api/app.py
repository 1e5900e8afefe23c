"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..utils.logging_config import setup_logging
from ..db import Database, DatabaseConfig, EventStore
from .. import __version__
from .routes import (
    events,
    health
)

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    database: Database = app.state.database
    # Startup
    try:
        database.ensure_tables_exist()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise
    yield
    # Shutdown
    database.dispose()

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer invalid payloads with the same envelope as other failures."""
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    ]
    logger.info(f"Rejected payload for {request.method} {request.url.path}: {fields}")
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid event payload",
            "errors": fields,
        }
    )

def create_application(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Database to serve from. When omitted one is built from the
            environment; either way the application owns its lifecycle.
    """
    app = FastAPI(
        title="Eventboard API",
        description="API for creating, editing and listing events",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    database = database or Database(DatabaseConfig())
    app.state.database = database
    app.state.event_store = EventStore(database)

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")

    return app
