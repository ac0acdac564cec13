"""Entry point for the Snowtooth Status API.

Serves the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration (``HOST``, ``PORT``, ``LOG_LEVEL``, ``DATA_DIR`` and
``SUBSCRIBER_QUEUE_SIZE``) is read from environment variables; see
``snowtooth_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from snowtooth_api.app.core.config import settings
from snowtooth_api.app.core.logging_config import APP_LOGGER
from snowtooth_api.app.main import app


async def main() -> None:
    """Start the API server using Uvicorn."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    # Uvicorn reports the bound address itself once the socket is open.
    logging.getLogger(f"{APP_LOGGER}.run").info("Starting server on %s:%d", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
