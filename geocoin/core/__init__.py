"""Core data models and the grid index."""

from geocoin.core.enums import Direction, EventCategory
from geocoin.core.errors import MalformedMementoError
from geocoin.core.models import Cell, CellBounds, Depleted, LatLng, Token
from geocoin.core.board import Board
from geocoin.core.cache import CacheState
from geocoin.core.player import CoinCollection, Player
from geocoin.core.snapshot import CacheView, SessionSnapshot

__all__ = [
    "Board",
    "CacheState",
    "CacheView",
    "Cell",
    "CellBounds",
    "CoinCollection",
    "Depleted",
    "Direction",
    "EventCategory",
    "LatLng",
    "MalformedMementoError",
    "Player",
    "SessionSnapshot",
    "Token",
]
