"""Cache state: the mutable token count of one grid cell, and its memento."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geocoin.core.errors import MalformedMementoError
from geocoin.core.models import Cell, Depleted, Token

if TYPE_CHECKING:
    from geocoin.systems.rng import DeterministicRNG

INITIAL_VALUE_TAG = "initialValue"

_MEMENTO_RE = re.compile(r"[0-9]+")


@dataclass(slots=True)
class CacheState:
    """Tokens remaining in the cache at ``cell``."""

    cell: Cell
    tokens_remaining: int

    @classmethod
    def generate(cls, cell: Cell, rng: DeterministicRNG, scale: int = 100) -> CacheState:
        """Deterministic first-ever state of the cache at ``cell``."""
        value = math.floor(rng.luck(cell.luck_key(INITIAL_VALUE_TAG)) * scale)
        return cls(cell=cell, tokens_remaining=value)

    @property
    def is_depleted(self) -> bool:
        return self.tokens_remaining <= 0

    # -- memento --

    def serialize(self) -> str:
        return str(self.tokens_remaining)

    @classmethod
    def deserialize(cls, memento: str, cell: Cell) -> CacheState:
        """Rebuild a state from its memento; the cell comes from the storage key."""
        if not isinstance(memento, str) or _MEMENTO_RE.fullmatch(memento) is None:
            raise MalformedMementoError(memento, cell.key)
        return cls(cell=cell, tokens_remaining=int(memento))

    # -- mutation --

    def withdraw(self) -> Token | Depleted:
        """Take one token. An empty cache returns ``Depleted`` and is left untouched."""
        if self.tokens_remaining <= 0:
            return Depleted(self.cell)
        self.tokens_remaining -= 1
        return Token(self.cell.i, self.cell.j, self.tokens_remaining)
