"""Messages from the presentation layer into the game session."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.enums import Direction
from geocoin.core.models import LatLng


@dataclass(frozen=True, slots=True)
class PlayerMoved:
    """Explicit relocation; always rebuilds the visible set."""

    position: LatLng


@dataclass(frozen=True, slots=True)
class LocationFix:
    """A geolocation reading; only counts as a move past the threshold."""

    position: LatLng


@dataclass(frozen=True, slots=True)
class StepRequested:
    direction: Direction


@dataclass(frozen=True, slots=True)
class WithdrawRequested:
    i: int
    j: int


@dataclass(frozen=True, slots=True)
class ResetRequested:
    pass


Message = PlayerMoved | LocationFix | StepRequested | WithdrawRequested | ResetRequested
