"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Report liveness and whether envelope interception is on."""
    return {"status": "ok", "actions_enabled": request.app.state.settings.ACTIONS_ENABLED}
