"""Error types raised by the cache-state model."""

from __future__ import annotations


class MalformedMementoError(ValueError):
    """A persisted memento does not parse to a non-negative integer.

    Always recovered by regenerating the cache; never surfaced to the player.
    """

    def __init__(self, memento: object, key: str = "") -> None:
        self.memento = memento
        self.key = key
        where = f" for {key}" if key else ""
        super().__init__(f"Malformed memento{where}: {memento!r}")
