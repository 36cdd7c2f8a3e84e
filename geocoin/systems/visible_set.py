"""Visible-set updater: which nearby cells are live caches after each move."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from geocoin.core.board import Board
from geocoin.core.cache import CacheState
from geocoin.core.models import Cell, LatLng
from geocoin.systems.cache_store import CacheStore
from geocoin.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

SPAWN_TAG = "spawn"


@dataclass(frozen=True, slots=True)
class VisibleSetUpdate:
    """Outcome of one rebuild, for the presentation layer to apply."""

    evicted: tuple[Cell, ...]
    active: tuple[CacheState, ...]


class VisibleSetUpdater:
    """Owns the active cache set and rebuilds it from scratch on every move.

    A full rebuild is fine for a small fixed radius; larger worlds would want
    an incremental diff instead.
    """

    __slots__ = ("_board", "_caches", "_rng", "_spawn_probability", "_active")

    def __init__(
        self,
        board: Board,
        caches: CacheStore,
        rng: DeterministicRNG,
        spawn_probability: float,
    ) -> None:
        self._board = board
        self._caches = caches
        self._rng = rng
        self._spawn_probability = spawn_probability
        self._active: dict[Cell, CacheState] = {}

    # -- queries --

    def is_cache_site(self, cell: Cell) -> bool:
        return self._rng.next_bool(cell.luck_key(SPAWN_TAG), self._spawn_probability)

    def get(self, cell: Cell) -> CacheState | None:
        return self._active.get(cell)

    @property
    def active_states(self) -> list[CacheState]:
        return list(self._active.values())

    def __len__(self) -> int:
        return len(self._active)

    # -- updates --

    def flush(self) -> None:
        """Persist every active cache without evicting it."""
        for state in self._active.values():
            self._caches.persist(state)

    def clear(self) -> tuple[Cell, ...]:
        """Drop the active set without persisting (after a store reset)."""
        evicted = tuple(self._active)
        self._active.clear()
        return evicted

    def update(self, position: LatLng, radius: int | None = None) -> VisibleSetUpdate:
        # 1. persist-and-clear
        self.flush()
        evicted = self.clear()

        # 2. recompute, 3. filter
        for cell in self._board.cells_near(position, radius):
            if self.is_cache_site(cell):
                self._active[cell] = self._caches.load_or_create(cell)

        logger.debug("Visible set at %r: %d evicted, %d active", position, len(evicted), len(self._active))
        return VisibleSetUpdate(evicted=evicted, active=tuple(self._active.values()))
