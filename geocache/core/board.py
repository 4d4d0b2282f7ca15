"""Grid index: maps continuous coordinates onto canonical cells."""

from __future__ import annotations

from geocache.core.models import Bounds, Cell, LatLng

# Moore neighbourhood in tile steps: N, E, S, W, NE, SE, SW, NW
_NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (0, 1),
    (-1, 0),
    (0, -1),
    (1, 1),
    (-1, 1),
    (-1, -1),
    (1, -1),
)


class Board:
    """Canonical cell registry for a square-tiled world.

    Every cell handed out is interned: two lookups that round to the
    same ``(i, j)`` return the very same :class:`Cell` object.
    """

    __slots__ = ("tile_degrees", "precision", "_known_cells")

    def __init__(self, tile_degrees: float = 1e-4, precision: int = 4) -> None:
        self.tile_degrees = tile_degrees
        self.precision = precision
        self._known_cells: dict[tuple[float, float], Cell] = {}

    # -- canonicalization --

    def _round(self, value: float) -> float:
        # + 0.0 folds -0.0 into 0.0 so both render the same key
        return round(value, self.precision) + 0.0

    def canonical_cell(self, i: float, j: float) -> Cell:
        """Return the interned cell for an ``(i, j)`` pair, rounding first."""
        key = (self._round(i), self._round(j))
        cell = self._known_cells.get(key)
        if cell is None:
            cell = Cell(*key)
            self._known_cells[key] = cell
        return cell

    def is_canonical(self, i: float, j: float) -> bool:
        """True when ``(i, j)`` is already at board precision."""
        return self._round(i) == i and self._round(j) == j

    @property
    def known_cells(self) -> int:
        return len(self._known_cells)

    # -- queries --

    def cell_for_point(self, lat: float, lng: float) -> Cell:
        return self.canonical_cell(lat, lng)

    def cell_bounds(self, cell: Cell) -> Bounds:
        return Bounds(
            southwest=LatLng(cell.i, cell.j),
            northeast=LatLng(cell.i + self.tile_degrees, cell.j + self.tile_degrees),
        )

    def neighbors(self, cell: Cell) -> list[Cell]:
        """The eight surrounding cells, one tile away, in a fixed order."""
        step = self.tile_degrees
        return [
            self.canonical_cell(cell.i + di * step, cell.j + dj * step)
            for di, dj in _NEIGHBOR_OFFSETS
        ]

    def cells_near_point(self, point: LatLng, radius: int) -> list[Cell]:
        """All cells in the ``(2r+1)`` square centred on *point*'s cell.

        Rows run south to north, columns west to east.
        """
        origin = self.cell_for_point(point.lat, point.lng)
        step = self.tile_degrees
        result: list[Cell] = []
        for di in range(-radius, radius + 1):
            for dj in range(-radius, radius + 1):
                result.append(self.canonical_cell(origin.i + di * step, origin.j + dj * step))
        return result

    def clear(self) -> None:
        self._known_cells.clear()
