"""
Main entrypoint for the Users API.

This module assembles the FastAPI application: logging, middleware,
error handlers, the service information routes and the ``/api``
routers.  ``create_app`` builds a fresh application, each with its own
:class:`UserStore`; the module level ``app`` is the instance served in
production, e.g.::

    uvicorn users_api.app.main:app --reload

Tests call ``create_app`` directly so that no state is shared between
them.
"""

import time
from typing import Optional

from fastapi import FastAPI

from .api.endpoints import info
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.middleware import apply_middleware
from .services.user_store import UserStore


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Settings, optional
        Configuration to use.  Defaults to the settings read from the
        environment at import time.
    store : UserStore, optional
        Store backing the user endpoints.  A new empty store is created
        when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the setup below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.state.settings = settings
    app.state.started_at = time.monotonic()
    # UserStore defines __len__: an empty store is falsy.
    app.state.user_store = store if store is not None else UserStore()

    apply_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(info.router, tags=["info"])
    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn and the Lambda adapter can discover it without calling
# create_app manually.
app = create_app()
