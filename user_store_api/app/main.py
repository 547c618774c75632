"""
Main entrypoint for the User Store API.

This module assembles the FastAPI application, sets up logging,
middleware and error handling, and includes the versioned routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``.  Importing the
app here makes it easy to run with uvicorn or another ASGI server,
e.g.::

    uvicorn user_store_api.app.main:app --reload

Configuration comes from ``Settings`` in ``core.config``.  Tests pass
their own ``Settings`` to ``create_app`` to point the application at a
temporary store file.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.home import router as home_router
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.middleware import register_middleware
from .core.store import RecordStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    The record store is created here from ``settings.store_path`` and
    kept on ``app.state.store``; routes obtain it through a dependency
    rather than a module global.  When ``settings.init_store`` is set,
    an empty store file is written on startup if none exists.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use.  Defaults to the module level settings read
        from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None, settings.access_log)

    store = RecordStore(settings.store_path, locking=settings.store_locking)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.init_store:
            store.initialize()
        logger.info("Serving users from %s", store.path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.store = store

    register_exception_handlers(app)
    register_middleware(app, settings)

    app.include_router(home_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
