"""
Main entrypoint for the Finance API.

This module assembles the FastAPI application: it sets up logging,
installs the exception handlers and includes the versioned routers.
The ``create_app`` function builds the app, which is then instantiated
at module import time as ``app`` so it can be served with::

    uvicorn finance_api.app.main:app --reload
"""

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.exception_handlers import add_exception_handlers
from .core.logging_config import setup_logging


def create_app(run_migrations: bool = True) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    run_migrations : bool
        Apply pending database migrations at startup.  Tests running
        against an in‑memory store disable this.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    add_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")

    if run_migrations:
        @app.on_event("startup")
        async def startup_event() -> None:
            init_db()

    return app


app = create_app()
