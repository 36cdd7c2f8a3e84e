"""Thread-safe log of session events exposed via the API."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from dataclasses import dataclass

from geocoin.core.enums import EventCategory


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single session event for the API event feed."""

    seq: int
    category: EventCategory
    message: str
    cell: tuple[int, int] | None = None


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Oldest events fall off once ``maxlen`` is reached. Sequence numbers keep
    increasing across ``clear()`` so pollers never see a number reused.
    """

    __slots__ = ("_buffer", "_lock", "_seq")

    def __init__(self, maxlen: int = 1000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._seq = itertools.count()

    def append(self, category: EventCategory, message: str, cell: tuple[int, int] | None = None) -> GameEvent:
        with self._lock:
            event = GameEvent(next(self._seq), category, message, cell)
            self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[GameEvent]:
        """Return all events with seq >= *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq >= seq]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
