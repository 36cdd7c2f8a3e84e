"""Engine systems: randomness, persistence, visible-set tracking."""

from geocoin.systems.rng import DeterministicRNG
from geocoin.systems.storage import InMemoryStore, JsonFileStore, KeyValueStore
from geocoin.systems.cache_store import CacheStore
from geocoin.systems.visible_set import VisibleSetUpdate, VisibleSetUpdater

__all__ = [
    "CacheStore",
    "DeterministicRNG",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "VisibleSetUpdate",
    "VisibleSetUpdater",
]
