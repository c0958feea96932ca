"""
Main entrypoint for the portfolio server.

This module assembles the FastAPI application: it sets up logging,
opens the portfolio store, seeds it from the JSON document on startup,
includes the API router and serves the static site for every other
path.  ``create_app`` is a factory, so the app can be served with::

    uvicorn portfolio_server.app.main:create_app --factory

or through ``run.py`` at the project root.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import StoreError
from .core.logging_config import setup_logging
from .services.portfolio_store import PortfolioStore

logger = logging.getLogger(__name__)


def seed_store(store: PortfolioStore, seed_file: Path) -> int:
    """Seed ``store`` from ``seed_file``, logging instead of raising.

    Seeding is best effort: the server keeps running with whatever the
    database already holds.  Returns the number of imported items.
    """
    try:
        return store.seed_from_source(seed_file)
    except StoreError as exc:
        logger.warning("Failed to load seed data from %s: %s", seed_file, exc)
        return 0


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed form submissions with 400 instead of FastAPI's 422."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Opening the store happens here rather than on startup so that an
    unusable database stops the process before it starts listening
    (``InitializationError`` propagates to the caller).

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so that the store can log.
    setup_logging(settings.log_level, settings.log_file)

    document_root = settings.document_root_path
    document_root.mkdir(parents=True, exist_ok=True)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    store = PortfolioStore(settings.database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Runs before the first request is accepted, so the seed's
        # check-then-import never races with request handlers.
        seed_store(store, settings.seed_file)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(api_router, prefix="/api")

    # The static mount matches every path, so it must come after the API.
    app.mount("/", StaticFiles(directory=str(document_root), html=True), name="site")

    logger.info("Serving %s with database %s", document_root, settings.database_path)
    return app
