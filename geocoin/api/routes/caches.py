"""Visible caches.

GET  /api/v1/caches/{i}/{j}           read one active cache and its bounds
POST /api/v1/caches/{i}/{j}/withdraw  take one coin from it
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import CacheSchema, TokenResponse
from geocoin.api.serializers import cache_schema
from geocoin.core.models import Depleted
from geocoin.engine.session import GameSession

router = APIRouter(prefix="/caches")


@router.get("/{i}/{j}", response_model=CacheSchema)
def get_cache(i: int, j: int, session: GameSession = Depends(get_session)) -> CacheSchema:
    view = session.snapshot().cache_at(i, j)
    if view is None:
        raise HTTPException(status_code=404, detail=f"No visible cache at {i},{j}.")
    return cache_schema(session, view)


@router.post("/{i}/{j}/withdraw", response_model=TokenResponse)
def withdraw(i: int, j: int, session: GameSession = Depends(get_session)) -> TokenResponse:
    result = session.withdraw(i, j)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No visible cache at {i},{j}.")
    if isinstance(result, Depleted):
        raise HTTPException(status_code=409, detail=f"Cache at {i},{j} is empty.")
    return TokenResponse(
        serial=result.serial,
        origin_i=result.i,
        origin_j=result.j,
        tokens_remaining=result.sequence,
        coin_count=session.snapshot().coin_count,
    )
