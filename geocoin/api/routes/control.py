"""POST /api/v1/control/reset: wipe all caches and coins."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import ControlResponse
from geocoin.engine.session import GameSession

router = APIRouter()


@router.post("/control/reset", response_model=ControlResponse)
def reset(session: GameSession = Depends(get_session)) -> ControlResponse:
    """Irreversible; the UI is expected to confirm with the player first."""
    update = session.reset()
    return ControlResponse(
        status="ok",
        message=f"Game reset. {len(update.active)} caches nearby.",
    )
