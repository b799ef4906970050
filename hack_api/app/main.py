"""
Main entrypoint for the Hack24 API.

This module assembles the FastAPI application: logging, the shared
objects every request needs (settings, database handle, event
broadcaster, identity provider), the HTTP middlewares, the JSON:API
exception handlers and the collection routers.  ``create_app`` accepts
replacements for each shared object so tests can build an app against a
temporary database, a recording relay and a stub identity provider.

The module-level ``app`` is built from the environment at import time so
it can be served directly::

    uvicorn hack_api.app.main:app
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.responses import cors_headers
from .services.event_broadcaster import EventBroadcaster
from .services.identity_service import SlackIdentityProvider


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    broadcaster: Optional[EventBroadcaster] = None,
    identity_provider=None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration; defaults to the values read from the environment.
    database : Optional[Database]
        Database handle; defaults to ``settings.database_url``.
    broadcaster : Optional[EventBroadcaster]
        Event relay client; defaults to one built from ``settings.pusher_url``.
    identity_provider
        Object with a blocking ``lookup(slack_id)`` method; defaults to
        the Slack Web API client.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.broadcaster = broadcaster or EventBroadcaster(settings.pusher_url)
    app.state.identity_provider = identity_provider or SlackIdentityProvider(
        settings.slack_api_token, settings.slack_api_url or None
    )

    app.middleware("http")(cors_headers)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_exception_handlers(app)
    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        app.state.database.init_db()
        app.state.broadcaster.start()
        logger.info("%s %s started", settings.project_name, settings.api_version)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.broadcaster.close()

    return app


app = create_app()
