"""GameSession: the single writer of player, board and cache state.

The presentation layer never mutates game state directly. It sends messages
(``PlayerMoved``, ``LocationFix``, ``StepRequested``, ``WithdrawRequested``,
``ResetRequested``) through ``handle`` and renders whatever comes back.
Readers never touch the live state: they take the latest ``SessionSnapshot``,
swapped in atomically after every message.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from geocoin.core.board import Board
from geocoin.core.enums import Direction, EventCategory
from geocoin.core.models import Cell, Depleted, LatLng, Token
from geocoin.core.player import CoinCollection, Player
from geocoin.core.snapshot import CacheView, SessionSnapshot
from geocoin.engine.messages import (
    LocationFix,
    Message,
    PlayerMoved,
    ResetRequested,
    StepRequested,
    WithdrawRequested,
)
from geocoin.systems.cache_store import CacheStore
from geocoin.systems.rng import DeterministicRNG
from geocoin.systems.storage import InMemoryStore, JsonFileStore, KeyValueStore
from geocoin.systems.visible_set import VisibleSetUpdate, VisibleSetUpdater
from geocoin.utils.event_log import EventLog

if TYPE_CHECKING:
    from geocoin.config import GameConfig

logger = logging.getLogger(__name__)


def open_store(config: GameConfig) -> KeyValueStore:
    if config.storage_path:
        return JsonFileStore(config.storage_path)
    return InMemoryStore()


class GameSession:
    """Processes one message at a time against the shared game state.

    ``handle`` holds a lock for the whole pipeline run, so hosts that deliver
    events from several threads still see moves applied one at a time.
    Reads go through ``snapshot()`` and never block on a running move.
    """

    def __init__(self, config: GameConfig, store: KeyValueStore | None = None) -> None:
        self.config = config
        self._lock = threading.Lock()

        self.rng = DeterministicRNG(config.rng_seed)
        self.board = Board(config.tile_degrees, config.neighborhood_size)
        self.store = store if store is not None else open_store(config)
        self.caches = CacheStore(self.store, self.rng, config.initial_value_scale)
        self.visible = VisibleSetUpdater(
            self.board, self.caches, self.rng, config.cache_spawn_probability,
        )
        self.events = EventLog()

        self._snapshot_lock = threading.Lock()
        self._version = 0
        self._latest_snapshot: SessionSnapshot | None = None

        coins = self.caches.load_coins()
        self.player = Player(self.start_position, CoinCollection(coins))
        if coins:
            logger.info("Restored %d coins", len(coins))
        self.last_update = self._rebuild()
        self._publish()

    # -- snapshot access --

    def snapshot(self) -> SessionSnapshot:
        with self._snapshot_lock:
            assert self._latest_snapshot is not None
            return self._latest_snapshot

    # -- public properties --

    @property
    def start_position(self) -> LatLng:
        return LatLng(self.config.start_lat, self.config.start_lng)

    @property
    def current_cell(self) -> Cell:
        return self.snapshot().cell

    @property
    def active_caches(self) -> list[CacheView]:
        return list(self.snapshot().caches)

    # -- message handling --

    def handle(self, message: Message) -> Any:
        """Apply one message and return its result.

        - ``PlayerMoved`` / ``StepRequested`` / ``ResetRequested`` -> ``VisibleSetUpdate``
        - ``LocationFix`` -> ``VisibleSetUpdate``, or None below the move threshold
        - ``WithdrawRequested`` -> ``Token``, ``Depleted``, or None if no cache is active there
        """
        with self._lock:
            result = self._dispatch(message)
            self._publish()
            return result

    def _dispatch(self, message: Message) -> Any:
        match message:
            case PlayerMoved(position=position):
                return self._move(position)
            case LocationFix(position=position):
                return self._location_fix(position)
            case StepRequested(direction=direction):
                return self._step(direction)
            case WithdrawRequested(i=i, j=j):
                return self._withdraw(i, j)
            case ResetRequested():
                return self._reset()
            case _:
                raise TypeError(f"Unsupported message: {message!r}")

    # -- convenience wrappers --

    def move_to(self, position: LatLng) -> VisibleSetUpdate:
        return self.handle(PlayerMoved(position))

    def report_location(self, position: LatLng) -> VisibleSetUpdate | None:
        return self.handle(LocationFix(position))

    def step(self, direction: Direction) -> VisibleSetUpdate:
        return self.handle(StepRequested(direction))

    def withdraw(self, i: int, j: int) -> Token | Depleted | None:
        return self.handle(WithdrawRequested(i, j))

    def reset(self) -> VisibleSetUpdate:
        return self.handle(ResetRequested())

    def close(self) -> None:
        """Persist every active cache."""
        with self._lock:
            self.visible.flush()

    # -- internals (lock held) --

    def _publish(self) -> None:
        self._version += 1
        snap = SessionSnapshot.capture(
            self._version,
            self.player,
            self.board.cell_for_point(self.player.position),
            self.visible.active_states,
        )
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _rebuild(self) -> VisibleSetUpdate:
        update = self.visible.update(self.player.position)
        self.last_update = update
        for state in update.active:
            self.events.append(
                EventCategory.SPAWN,
                f"Cache at {state.cell.i},{state.cell.j} holds {state.tokens_remaining} coins",
                (state.cell.i, state.cell.j),
            )
        return update

    def _move(self, position: LatLng) -> VisibleSetUpdate:
        cell = self.board.cell_for_point(position)  # rejects non-finite input before any state changes
        self.player.move_to(position)
        logger.info("Player moved to %r (cell %d,%d)", position, cell.i, cell.j)
        self.events.append(EventCategory.MOVE, f"Moved to {position.lat:.6f},{position.lng:.6f}", (cell.i, cell.j))
        return self._rebuild()

    def _location_fix(self, position: LatLng) -> VisibleSetUpdate | None:
        if position.distance_to(self.player.position) <= self.config.move_threshold:
            logger.debug("Ignoring location fix %r within threshold", position)
            return None
        return self._move(position)

    def _step(self, direction: Direction) -> VisibleSetUpdate:
        d_lat, d_lng = direction.offset
        tile = self.config.tile_degrees
        return self._move(self.player.position.offset(d_lat * tile, d_lng * tile))

    def _withdraw(self, i: int, j: int) -> Token | Depleted | None:
        state = self.visible.get(Cell(i, j))
        if state is None:
            logger.info("Withdraw ignored: no active cache at %d,%d", i, j)
            return None

        result = state.withdraw()
        if isinstance(result, Depleted):
            self.events.append(EventCategory.DEPLETED, f"Cache at {i},{j} is empty", (i, j))
            return result

        # Cache count first: a lost ledger write must never let a serial be reissued.
        self.caches.persist(state)
        self.caches.save_coin(len(self.player.coins), result)
        self.player.coins.append(result)
        logger.debug("Withdrew %s (%d left)", result.serial, state.tokens_remaining)
        self.events.append(
            EventCategory.WITHDRAW,
            f"Collected {result.serial}; {len(self.player.coins)} coins total",
            (i, j),
        )
        return result

    def _reset(self) -> VisibleSetUpdate:
        self.caches.reset()
        evicted = self.visible.clear()
        self.player.restart(self.start_position)
        logger.info("Game reset; player returned to %r", self.player.position)
        self.events.append(EventCategory.RESET, "Game reset")
        update = self._rebuild()
        self.last_update = VisibleSetUpdate(evicted=evicted, active=update.active)
        return self.last_update
