"""Cache store: cell -> CacheState, backed by a key-value store.

Persisted layout::

    "{i}:{j}"      -> tokens remaining, as a decimal string
    "coin{index}"  -> token serial, written append-only by index
"""

from __future__ import annotations

import logging

from geocoin.core.cache import CacheState
from geocoin.core.errors import MalformedMementoError
from geocoin.core.models import Cell, Token
from geocoin.systems.rng import DeterministicRNG
from geocoin.systems.storage import KeyValueStore

logger = logging.getLogger(__name__)

COIN_KEY_PREFIX = "coin"


def coin_key(index: int) -> str:
    return f"{COIN_KEY_PREFIX}{index}"


class CacheStore:
    """Loads, generates and persists cache states."""

    __slots__ = ("_store", "_rng", "_scale")

    def __init__(self, store: KeyValueStore, rng: DeterministicRNG, initial_value_scale: int = 100) -> None:
        self._store = store
        self._rng = rng
        self._scale = initial_value_scale

    @property
    def backend(self) -> KeyValueStore:
        return self._store

    # -- caches --

    def generate(self, cell: Cell) -> CacheState:
        return CacheState.generate(cell, self._rng, self._scale)

    def load_or_create(self, cell: Cell) -> CacheState:
        """Restore the cache at ``cell`` from its memento, else generate it.

        A generated state is not written until ``persist`` is called.
        """
        memento = self._store.get(cell.key)
        if memento is not None:
            try:
                state = CacheState.deserialize(memento, cell)
            except MalformedMementoError as exc:
                logger.warning("%s; regenerating", exc)
            else:
                logger.debug("Loaded %s with %d tokens", cell, state.tokens_remaining)
                return state
        state = self.generate(cell)
        logger.debug("Generated %s with %d tokens", cell, state.tokens_remaining)
        return state

    def persist(self, state: CacheState) -> None:
        self._store.set(state.cell.key, state.serialize())

    def reset(self) -> None:
        """Erase every persisted cache and the player's coin collection."""
        count = len(self._store.keys())
        self._store.clear()
        logger.info("Store reset (%d keys removed)", count)

    # -- player coins --

    def save_coin(self, index: int, token: Token) -> None:
        self._store.set(coin_key(index), token.serial)

    def load_coins(self) -> list[Token]:
        """Read ``coin0``, ``coin1``, ... up to the first missing or unreadable index.

        Ledger entries past that index are deleted, so the next ``save_coin``
        never lands between stale coins that a later restore would pick up.
        """
        tokens: list[Token] = []
        index = 0
        while (serial := self._store.get(coin_key(index))) is not None:
            try:
                tokens.append(Token.parse(serial))
            except ValueError:
                logger.warning("Stopping coin restore at %s: bad serial %r", coin_key(index), serial)
                break
            index += 1
        self._drop_coins_from(len(tokens))
        return tokens

    def _drop_coins_from(self, start: int) -> None:
        for key in self._store.keys():
            suffix = key[len(COIN_KEY_PREFIX):]
            if key.startswith(COIN_KEY_PREFIX) and suffix.isdigit() and int(suffix) >= start:
                logger.warning("Dropping stale ledger entry %s", key)
                self._store.delete(key)
