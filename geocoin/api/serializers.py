"""Conversions from core objects to API schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoin.api.schemas import BoundsSchema, CacheSchema, PlayerSchema, VisibleSetResponse

if TYPE_CHECKING:
    from geocoin.core.cache import CacheState
    from geocoin.core.snapshot import CacheView, SessionSnapshot
    from geocoin.engine.session import GameSession
    from geocoin.systems.visible_set import VisibleSetUpdate


def cache_schema(session: GameSession, state: CacheState | CacheView) -> CacheSchema:
    b = session.board.cell_bounds(state.cell)
    return CacheSchema(
        i=state.cell.i,
        j=state.cell.j,
        tokens_remaining=state.tokens_remaining,
        bounds=BoundsSchema(south=b.south, west=b.west, north=b.north, east=b.east),
    )


def player_schema(snap: SessionSnapshot) -> PlayerSchema:
    return PlayerSchema(
        lat=snap.position.lat,
        lng=snap.position.lng,
        cell_i=snap.cell.i,
        cell_j=snap.cell.j,
        coin_count=snap.coin_count,
        coins=list(snap.coins),
        trail=[(pt.lat, pt.lng) for pt in snap.trail],
    )


def visible_set_response(session: GameSession, update: VisibleSetUpdate | None) -> VisibleSetResponse:
    if update is None:
        return VisibleSetResponse(moved=False)
    return VisibleSetResponse(
        moved=True,
        evicted=[(c.i, c.j) for c in update.evicted],
        caches=[cache_schema(session, s) for s in update.active],
    )
