"""POST /api/v1/player/*: movement messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import LatLngSchema, VisibleSetResponse
from geocoin.api.serializers import visible_set_response
from geocoin.core.enums import Direction
from geocoin.core.models import LatLng
from geocoin.engine.session import GameSession

router = APIRouter(prefix="/player")


@router.post("/location", response_model=VisibleSetResponse)
def report_location(
    fix: LatLngSchema,
    session: GameSession = Depends(get_session),
) -> VisibleSetResponse:
    """Geolocation fix; ignored unless it is more than half a tile away."""
    update = session.report_location(LatLng(fix.lat, fix.lng))
    return visible_set_response(session, update)


@router.post("/move", response_model=VisibleSetResponse)
def move(
    target: LatLngSchema,
    session: GameSession = Depends(get_session),
) -> VisibleSetResponse:
    update = session.move_to(LatLng(target.lat, target.lng))
    return visible_set_response(session, update)


@router.post("/step/{direction}", response_model=VisibleSetResponse)
def step(
    direction: Direction,
    session: GameSession = Depends(get_session),
) -> VisibleSetResponse:
    update = session.step(direction)
    return visible_set_response(session, update)
