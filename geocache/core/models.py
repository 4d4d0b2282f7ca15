"""Core data models: LatLng, Bounds, Cell, Coin."""

from __future__ import annotations

from dataclasses import dataclass

from geocache.core.enums import Direction


@dataclass(frozen=True, slots=True)
class LatLng:
    """Immutable geographic coordinate in degrees."""

    lat: float = 0.0
    lng: float = 0.0

    def offset(self, d_lat: float, d_lng: float) -> LatLng:
        return LatLng(self.lat + d_lat, self.lng + d_lng)

    def __repr__(self) -> str:
        return f"({self.lat}, {self.lng})"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle between two corners."""

    southwest: LatLng
    northeast: LatLng


@dataclass(frozen=True, slots=True)
class Cell:
    """Lower-left corner of a grid square, already rounded to board precision.

    Obtain cells from :class:`geocache.core.board.Board` so that equal
    pairs share one object.
    """

    i: float
    j: float

    @property
    def key(self) -> str:
        """Canonical ``"i,j"`` text used for storage keys and RNG seeds."""
        return f"{self.i!r},{self.j!r}"

    def __repr__(self) -> str:
        return f"Cell({self.key})"


# Tile-step offsets (d_lat, d_lng) mapped to Direction enum values
DIRECTION_OFFSETS: dict[int, tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (-1, 0),
    Direction.WEST: (0, -1),
}

CoinId = tuple[float, float, int]


@dataclass(frozen=True, slots=True, eq=False)
class Coin:
    """A uniquely identified token minted in *cell*.

    Equality and hashing use :attr:`coin_id` only, so a coin read back
    from storage compares equal to the one that was written.
    """

    cell: Cell
    serial: int

    @property
    def coin_id(self) -> CoinId:
        return (self.cell.i, self.cell.j, self.serial)

    @property
    def label(self) -> str:
        return f"{self.cell.i!r}:{self.cell.j!r}#{self.serial}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coin):
            return NotImplemented
        return self.coin_id == other.coin_id

    def __hash__(self) -> int:
        return hash(self.coin_id)

    def __repr__(self) -> str:
        return f"Coin({self.label})"
