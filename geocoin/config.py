"""Game configuration with defaults matching the classroom start location."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # Grid
    tile_degrees: float = 1e-4
    neighborhood_size: int = 8          # visibility radius, in cells

    # Caches
    cache_spawn_probability: float = 0.1
    initial_value_scale: int = 100      # initial tokens = floor(luck * scale)
    rng_seed: int = 0

    # Player start (Oakes College classroom)
    start_lat: float = 36.98949379578401
    start_lng: float = -122.06277128548504

    # Persistence
    storage_path: str | None = None     # None = in-memory store

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not (self.tile_degrees > 0 and math.isfinite(self.tile_degrees)):
            raise ValueError(f"tile_degrees must be positive, got {self.tile_degrees}")
        if self.neighborhood_size < 0:
            raise ValueError(f"neighborhood_size must be >= 0, got {self.neighborhood_size}")
        if not 0.0 <= self.cache_spawn_probability <= 1.0:
            raise ValueError(
                f"cache_spawn_probability must be in [0, 1], got {self.cache_spawn_probability}"
            )
        if self.initial_value_scale <= 0:
            raise ValueError(f"initial_value_scale must be positive, got {self.initial_value_scale}")

    @property
    def move_threshold(self) -> float:
        """Minimum location discrepancy (degrees) that counts as a player move."""
        return self.tile_degrees / 2
