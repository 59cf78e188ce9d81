"""Request dependencies for action handlers."""

from fastapi import HTTPException, Request

from action_gateway.middleware import ActionContext


async def get_action_context(request: Request) -> ActionContext:
    """Return the rewritten action attached by ActionEnvelopeMiddleware."""
    context = getattr(request.state, "action", None)
    if not isinstance(context, ActionContext):
        raise HTTPException(status_code=400, detail="Request is not an action call")
    return context
