"""Grid index: canonical cells over latitude/longitude."""

from __future__ import annotations

import math

from geocoin.core.models import Cell, CellBounds, LatLng


class Board:
    """Maps geographic points onto a grid of square cells.

    Every cell handed out is canonical: the same ``(i, j)`` always yields the
    same ``Cell`` instance for the lifetime of the board, so callers can key
    dicts by identity or by value interchangeably.
    """

    __slots__ = ("tile_width", "visibility_radius", "_known_cells")

    def __init__(self, tile_width: float, visibility_radius: int) -> None:
        self.tile_width = tile_width
        self.visibility_radius = visibility_radius
        self._known_cells: dict[str, Cell] = {}

    # -- registry --

    def canonicalize(self, cell: Cell) -> Cell:
        """Return the registered instance for ``cell``, registering it if new."""
        return self._known_cells.setdefault(cell.key, cell)

    def _cell(self, i: int, j: int) -> Cell:
        known = self._known_cells.get(f"{i}:{j}")
        if known is not None:
            return known
        return self.canonicalize(Cell(i, j))

    @property
    def known_cell_count(self) -> int:
        return len(self._known_cells)

    # -- geometry --

    def cell_for_point(self, point: LatLng) -> Cell:
        """Return the cell containing ``point``.

        Latitude is floored but longitude is ceiled. The asymmetry is kept as-is:
        changing it would move every cell boundary and orphan persisted caches.
        """
        if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
            raise ValueError(f"Non-finite coordinates: {point!r}")
        return self._cell(
            math.floor(point.lat / self.tile_width),
            math.ceil(point.lng / self.tile_width),
        )

    def cell_bounds(self, cell: Cell) -> CellBounds:
        # Floors on both axes, so a point's own cell is drawn one tile east of it.
        south = cell.i * self.tile_width
        west = cell.j * self.tile_width
        return CellBounds(
            south=south,
            west=west,
            north=south + self.tile_width,
            east=west + self.tile_width,
        )

    def cells_near(self, point: LatLng, radius: int | None = None) -> list[Cell]:
        """Return the ``(2r+1)**2`` cells centred on the cell under ``point``.

        Row-major over ``(di, dj)``; consumers should not rely on the order.
        """
        if radius is None:
            radius = self.visibility_radius
        if radius < 0:
            raise ValueError(f"radius must be >= 0, got {radius}")
        origin = self.cell_for_point(point)
        return [
            self._cell(origin.i + di, origin.j + dj)
            for di in range(-radius, radius + 1)
            for dj in range(-radius, radius + 1)
        ]
