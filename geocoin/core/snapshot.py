"""Immutable snapshot of the session state for concurrent readers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geocoin.core.models import Cell, LatLng

if TYPE_CHECKING:
    from geocoin.core.cache import CacheState
    from geocoin.core.player import Player


@dataclass(frozen=True, slots=True)
class CacheView:
    """Frozen copy of one active cache."""

    cell: Cell
    tokens_remaining: int


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of the player and the visible caches after one message.

    Built while the session lock is held, so position, cell and caches always
    come from the same move.
    """

    version: int
    position: LatLng
    cell: Cell
    coins: tuple[str, ...]
    trail: tuple[LatLng, ...]
    caches: tuple[CacheView, ...]

    @classmethod
    def capture(cls, version: int, player: Player, cell: Cell, states: Iterable[CacheState]) -> SessionSnapshot:
        return cls(
            version=version,
            position=player.position,
            cell=cell,
            coins=tuple(player.coins.serials),
            trail=tuple(player.trail),
            caches=tuple(CacheView(s.cell, s.tokens_remaining) for s in states),
        )

    @property
    def coin_count(self) -> int:
        return len(self.coins)

    def cache_at(self, i: int, j: int) -> CacheView | None:
        for view in self.caches:
            if view.cell.i == i and view.cell.j == j:
                return view
        return None
