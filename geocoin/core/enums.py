"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, unique


@unique
class Direction(str, Enum):
    """Single-tile movement directions."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def offset(self) -> tuple[int, int]:
        """(d_lat, d_lng) in tiles."""
        return _DIRECTION_OFFSETS[self]


_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.SOUTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


@unique
class EventCategory(str, Enum):
    """Categories for the session event feed."""

    MOVE = "move"
    SPAWN = "spawn"
    WITHDRAW = "withdraw"
    DEPLETED = "depleted"
    RESET = "reset"
