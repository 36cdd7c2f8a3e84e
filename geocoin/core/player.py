"""Player position, movement trail and coin collection."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from geocoin.core.models import LatLng, Token


class CoinCollection:
    """Ordered, append-only sequence of tokens owned by the player.

    Tokens leave the collection only through ``clear()`` on game reset.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: list[Token] | None = None) -> None:
        self._tokens: list[Token] = list(tokens) if tokens else []

    def append(self, token: Token) -> int:
        """Add a token and return its index."""
        self._tokens.append(token)
        return len(self._tokens) - 1

    def clear(self) -> None:
        self._tokens.clear()

    @property
    def serials(self) -> list[str]:
        return [t.serial for t in self._tokens]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]


@dataclass(slots=True)
class Player:
    """The single local player."""

    position: LatLng
    coins: CoinCollection = field(default_factory=CoinCollection)
    trail: list[LatLng] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.trail:
            self.trail.append(self.position)

    def move_to(self, position: LatLng) -> None:
        self.position = position
        self.trail.append(position)

    def restart(self, position: LatLng) -> None:
        """Return to ``position`` with no coins and a fresh trail."""
        self.position = position
        self.coins.clear()
        self.trail.clear()
        self.trail.append(position)
