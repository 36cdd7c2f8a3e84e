"""Core value objects: LatLng, Cell, CellBounds, Token, Depleted."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LatLng:
    """Geographic point in degrees."""

    lat: float
    lng: float

    def offset(self, d_lat: float, d_lng: float) -> LatLng:
        return LatLng(self.lat + d_lat, self.lng + d_lng)

    def distance_to(self, other: LatLng) -> float:
        """Planar distance in degrees (tiles are small enough to ignore curvature)."""
        return ((self.lat - other.lat) ** 2 + (self.lng - other.lng) ** 2) ** 0.5

    def __repr__(self) -> str:
        return f"LatLng({self.lat:.6f}, {self.lng:.6f})"


@dataclass(frozen=True, slots=True)
class Cell:
    """Immutable grid square identified by integer coordinates."""

    i: int
    j: int

    @property
    def key(self) -> str:
        """Storage key, e.g. ``"369894:-1220627"``."""
        return f"{self.i}:{self.j}"

    def luck_key(self, *tags: str) -> str:
        """Randomness key for this cell, e.g. ``"5,5,initialValue"``.

        Distinct tags give independent draws for the same cell.
        """
        return ",".join([str(self.i), str(self.j), *tags])

    def __repr__(self) -> str:
        return f"Cell({self.i}, {self.j})"


@dataclass(frozen=True, slots=True)
class CellBounds:
    """Geographic rectangle covered by a cell."""

    south: float
    west: float
    north: float
    east: float

    def contains(self, point: LatLng) -> bool:
        return self.south <= point.lat <= self.north and self.west <= point.lng <= self.east


_SERIAL_RE = re.compile(r"^(-?\d+):(-?\d+)#(\d+)$")


@dataclass(frozen=True, slots=True)
class Token:
    """A collectible coin, traceable to the cache it was withdrawn from."""

    i: int
    j: int
    sequence: int

    @property
    def serial(self) -> str:
        return f"{self.i}:{self.j}#{self.sequence}"

    @property
    def origin(self) -> Cell:
        return Cell(self.i, self.j)

    @classmethod
    def parse(cls, serial: str) -> Token:
        m = _SERIAL_RE.match(serial)
        if m is None:
            raise ValueError(f"Malformed token serial: {serial!r}")
        return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    def __str__(self) -> str:
        return self.serial


@dataclass(frozen=True, slots=True)
class Depleted:
    """Result of a withdrawal from an empty cache. Not an error; callers ignore it."""

    cell: Cell

    def __bool__(self) -> bool:
        return False
