"""FastAPI application hosting action handlers behind the envelope middleware."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from action_gateway.config import Settings, get_settings
from action_gateway.errors import ActionError
from action_gateway.logging import configure_logging
from action_gateway.middleware import ActionEnvelopeMiddleware
from action_gateway.rewriter import EnvelopeRewriter

from .errors import action_error_handler
from .routes.health import router as health_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective action settings at startup."""
    settings: Settings = app.state.settings

    logger.info(
        "lifespan.startup",
        actions_enabled=settings.ACTIONS_ENABLED,
        actions_path=settings.ACTIONS_PATH,
        actions_forward=settings.ACTIONS_FORWARD,
    )
    yield
    logger.info("lifespan.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Action handlers are plain routes added by the host application; with
    forwarding on they live at ``<ACTIONS_PATH>/<action name>``.
    """
    settings = settings or get_settings()
    configure_logging(json_output=settings.LOG_JSON, log_level=settings.LOG_LEVEL)

    app = FastAPI(
        title="action-gateway",
        description="Rewrites GraphQL action envelopes into single-argument handler calls",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        ActionEnvelopeMiddleware,
        enabled=settings.ACTIONS_ENABLED,
        path=settings.ACTIONS_PATH,
        forward=settings.ACTIONS_FORWARD,
        rewriter=EnvelopeRewriter(payload_key=settings.ACTIONS_PAYLOAD_KEY),
    )
    app.add_exception_handler(ActionError, action_error_handler)
    app.include_router(health_router)

    return app


app = create_app()
