"""
Main entrypoint for the Users API.

This module assembles the FastAPI application: logging, error
handlers, request logging and the API router.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn users_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.router import router as api_router
from .core.config import settings
from .core.db import Database
from .core.errors import register_exception_handlers
from .core.logging_config import RequestLoggingMiddleware, setup_logging


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[Database]
        Database the routes run against.  When omitted, one is built
        from ``settings.database_path``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    setup_logging(settings.log_level, settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create the table on startup so a fresh database file is usable.
        app.state.database.init_schema()
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.database = database or Database(settings.database_path)

    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
