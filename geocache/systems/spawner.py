"""Seed derivation and the spawn predicate.

Spawn visibility and a cache's coin count are independent draws over the
same cell: they hash different seed strings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocache.core.enums import Domain

if TYPE_CHECKING:
    from geocache.core.board import Board
    from geocache.core.models import Cell, LatLng
    from geocache.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def cell_seed(cell: Cell, domain: Domain = Domain.SPAWN) -> str:
    """Seed string for *cell* in *domain*.

    ``"i,j"`` for spawning, ``"i,j,initialValue"`` for the coin count.
    """
    if domain == Domain.INITIAL_VALUE:
        return f"{cell.key},initialValue"
    return cell.key


def is_spawn_cell(rng: DeterministicRNG, cell: Cell, probability: float) -> bool:
    return rng.next_bool(cell_seed(cell, Domain.SPAWN), probability)


def surfaced_cells(
    board: Board,
    rng: DeterministicRNG,
    point: LatLng,
    radius: int,
    probability: float,
) -> list[Cell]:
    """Scan the square around *point* and keep the cells that hold a cache."""
    cells = [
        cell
        for cell in board.cells_near_point(point, radius)
        if is_spawn_cell(rng, cell, probability)
    ]
    logger.debug("Scan around %s surfaced %d caches", point, len(cells))
    return cells
