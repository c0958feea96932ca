"""Entry point for the portfolio server.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as DATABASE_URL, SEED_PATH, DOCUMENT_ROOT, HOST and
PORT is read from environment variables; see
``portfolio_server/app/core/config.py`` for the full list and defaults.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from portfolio_server.app.core.config import settings
from portfolio_server.app.main import create_app


async def run_server() -> None:
    """Serve the application on ``settings.host``:``settings.port``."""
    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_server())
    except (KeyboardInterrupt, SystemExit):
        pass
    except Exception:
        logging.exception("Portfolio server failed to start")
        raise
