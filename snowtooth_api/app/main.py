"""
Main entrypoint for the Snowtooth Status API.

This module assembles the FastAPI application, sets up logging,
builds the shared ``ResortContext`` and includes versioned routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``, e.g.::

    uvicorn snowtooth_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.context import ResortContext, build_context
from .core.errors import InvalidStatusError, NotFoundError
from .core.logging_config import setup_logging
from .core.store import Collection


logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def invalid_status_handler(request: Request, exc: InvalidStatusError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(settings: Optional[Settings] = None, context: Optional[ResortContext] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use; defaults to the module level ``settings``.
    context : Optional[ResortContext]
        Pre-built context.  When omitted, the dataset is loaded from
        ``settings.data_dir`` and a new notification bus is created.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before loading data so the loader can log.
    setup_logging(settings.log_level, settings.log_file)

    if context is None:
        context = build_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "%s %s serving %d lifts and %d trails",
            settings.project_name,
            settings.api_version,
            context.store.count(Collection.LIFTS),
            context.store.count(Collection.TRAILS),
        )
        yield
        # Ends every open subscription so WebSocket handlers can return.
        context.pubsub.close_all()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.context = context

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidStatusError, invalid_status_handler)

    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
