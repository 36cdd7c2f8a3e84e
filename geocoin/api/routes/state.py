"""GET /api/v1/state and /api/v1/events: polled by the map UI."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import EventSchema, EventsResponse, GameStateResponse
from geocoin.api.serializers import cache_schema, player_schema
from geocoin.engine.session import GameSession

router = APIRouter()


@router.get("/state", response_model=GameStateResponse)
def get_state(session: GameSession = Depends(get_session)) -> GameStateResponse:
    snap = session.snapshot()
    return GameStateResponse(
        player=player_schema(snap),
        caches=[cache_schema(session, s) for s in snap.caches],
    )


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int | None = Query(None, ge=0, description="Return events with seq >= since"),
    limit: int = Query(50, gt=0, le=1000),
    session: GameSession = Depends(get_session),
) -> EventsResponse:
    events = session.events.since(since) if since is not None else session.events.latest(limit)
    return EventsResponse(
        events=[
            EventSchema(seq=e.seq, category=e.category.value, message=e.message, cell=e.cell)
            for e in events[:limit]
        ]
    )
