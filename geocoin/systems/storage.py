"""Key-value persistence backends.

The cache store only needs ``get``, ``set``, ``delete`` and ``clear`` over string keys
and values, the same contract a browser's localStorage offers. Two backends
are included:

1. InMemoryStore - dict-backed, lost on exit (tests, throwaway sessions)
2. JsonFileStore - one JSON object on disk, rewritten on every change
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String-to-string storage injected into the cache store."""

    __slots__ = ()

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key. Irreversible."""

    @abstractmethod
    def keys(self) -> list[str]:
        """All stored keys, in insertion order."""

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class InMemoryStore(KeyValueStore):
    """Dict-based storage; data is lost when the process exits."""

    __slots__ = ("_data",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Storage persisted as a single JSON object.

    The whole file is rewritten through a temporary file and an atomic
    replace on every ``set``, ``delete`` and ``clear``, so a crash never leaves half a file.
    A missing file starts empty; an unreadable one is logged and discarded.
    """

    __slots__ = ("_path", "_data")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()
        logger.info("Opened store %s (%d keys)", self._path, len(self._data))

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Discarding unreadable store %s: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Discarding store %s: expected a JSON object", self._path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._data.clear()
        self._flush()

    def keys(self) -> list[str]:
        return list(self._data)
