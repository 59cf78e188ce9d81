"""Exception handler returning ActionError in the engine's error format."""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from action_gateway.errors import ActionError

logger = structlog.get_logger(__name__)


async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    """Answer 400 with ``{"message": ..., "extensions": {...}}``."""
    logger.warning(
        "actions.handler_error",
        action_name=getattr(request.state, "action_name", None),
        error_code=exc.code,
        error=exc.message,
    )
    return JSONResponse(status_code=400, content=exc.to_dict())
