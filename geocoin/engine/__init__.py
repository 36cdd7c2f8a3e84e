"""Engine layer: session messages and the game session."""

from geocoin.engine.messages import (
    LocationFix,
    Message,
    PlayerMoved,
    ResetRequested,
    StepRequested,
    WithdrawRequested,
)
from geocoin.engine.session import GameSession

__all__ = [
    "GameSession",
    "LocationFix",
    "Message",
    "PlayerMoved",
    "ResetRequested",
    "StepRequested",
    "WithdrawRequested",
]
