"""Application definition for steambridge."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from safir.dependencies.http_client import http_client_dependency
from safir.logging import configure_uvicorn_logging
from safir.slack.webhook import SlackRouteErrorHandler

from . import __version__
from .dependencies.config import config_dependency
from .dependencies.context import context_dependency
from .handlers import callback, internal, login

__all__ = ["create_app", "create_openapi"]


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    await context_dependency.initialize(config_dependency.config())
    yield
    await http_client_dependency.aclose()
    await context_dependency.aclose()


def create_app(*, load_config: bool = True) -> FastAPI:
    """Create the steambridge application.

    Built by a factory function so that each test gets an application that
    matches its configuration, including whether Slack alerts are enabled.

    Parameters
    ----------
    load_config
        Whether to load the configuration. Generating the OpenAPI schema
        needs the routes but not a working configuration, so it passes
        `False`.
    """
    app = FastAPI(
        title="steambridge",
        description=(
            "steambridge authenticates users of a native application with"
            " Steam OpenID 2.0 and returns them to the application with a"
            " signed session token."
        ),
        version=__version__,
        tags_metadata=[
            {
                "name": "browser",
                "description": "Routes visited by the user's browser.",
            },
            {
                "name": "internal",
                "description": "Routes for monitoring the service.",
            },
        ],
        openapi_url="/auth/openapi.json",
        docs_url="/auth/docs",
        redoc_url="/auth/redoc",
        lifespan=_lifespan,
    )
    app.include_router(internal.router)
    app.include_router(login.router)
    app.include_router(callback.router)

    if not load_config:
        return app
    config = config_dependency.config()
    configure_uvicorn_logging()

    # Uncaught exceptions in any route are posted to Slack if enabled.
    if config.slack_enabled and config.slack_webhook:
        logger = structlog.get_logger("steambridge")
        webhook = config.slack_webhook.get_secret_value()
        SlackRouteErrorHandler.initialize(webhook, "steambridge", logger)
        logger.debug("Initialized Slack webhook")

    return app


def create_openapi(*, add_back_link: bool = False) -> str:
    """Render the OpenAPI schema as JSON.

    Parameters
    ----------
    add_back_link
        Whether to append a link to the documentation index to the
        description, for use when the schema is embedded in the manual.

    Returns
    -------
    str
        Serialized schema.
    """
    app = create_app(load_config=False)
    description = app.description
    if add_back_link:
        description += "\n\n[Return to steambridge documentation](.)."
    return json.dumps(
        get_openapi(
            title=app.title,
            description=description,
            version=app.version,
            routes=app.routes,
        )
    )
