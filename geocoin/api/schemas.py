"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class LatLngSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class BoundsSchema(BaseModel):
    south: float
    west: float
    north: float
    east: float


# --- Caches & player ---

class CacheSchema(BaseModel):
    i: int
    j: int
    tokens_remaining: int
    bounds: BoundsSchema


class PlayerSchema(BaseModel):
    lat: float
    lng: float
    cell_i: int
    cell_j: int
    coin_count: int
    coins: list[str] = []
    trail: list[tuple[float, float]] = []


class GameStateResponse(BaseModel):
    player: PlayerSchema
    caches: list[CacheSchema]


class VisibleSetResponse(BaseModel):
    """Result of a move: what to remove and what to draw."""

    moved: bool = True
    evicted: list[tuple[int, int]] = []
    caches: list[CacheSchema] = []


class TokenResponse(BaseModel):
    serial: str
    origin_i: int
    origin_j: int
    tokens_remaining: int
    coin_count: int


# --- Events ---

class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    cell: tuple[int, int] | None = None


class EventsResponse(BaseModel):
    events: list[EventSchema]


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str


# --- Config ---

class GameConfigResponse(BaseModel):
    tile_degrees: float
    neighborhood_size: int
    cache_spawn_probability: float
    initial_value_scale: int
    start_lat: float
    start_lng: float
    persistent: bool
