"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import GameConfigResponse
from geocoin.engine.session import GameSession

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(session: GameSession = Depends(get_session)) -> GameConfigResponse:
    cfg = session.config
    return GameConfigResponse(
        tile_degrees=cfg.tile_degrees,
        neighborhood_size=cfg.neighborhood_size,
        cache_spawn_probability=cfg.cache_spawn_probability,
        initial_value_scale=cfg.initial_value_scale,
        start_lat=cfg.start_lat,
        start_lng=cfg.start_lng,
        persistent=cfg.storage_path is not None,
    )
