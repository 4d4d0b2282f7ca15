"""Geocache containers and the generate-once cache store."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from geocache.core.enums import Domain
from geocache.core.models import Cell, Coin, CoinId
from geocache.persistence.records import dump_caches, parse_caches
from geocache.systems.spawner import cell_seed

if TYPE_CHECKING:
    from geocache.core.board import Board
    from geocache.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Geocache:
    """Ordered coins currently stored at one cell."""

    cell: Cell
    coins: list[Coin] = field(default_factory=list)

    def add_coin(self, coin: Coin) -> None:
        self.coins.append(coin)

    def remove_coin(self, coin: Coin) -> bool:
        if coin in self.coins:
            self.coins.remove(coin)
            return True
        return False

    def find(self, coin_id: CoinId) -> Coin | None:
        for coin in self.coins:
            if coin.coin_id == coin_id:
                return coin
        return None

    def __contains__(self, coin: object) -> bool:
        return coin in self.coins

    def __len__(self) -> int:
        return len(self.coins)


class CacheStore:
    """Owns every Geocache, keyed by cell.

    :meth:`cache_for_cell` is the single generation gate: a cell's coins
    are minted the first time it is looked up and never again.
    """

    __slots__ = ("_board", "_rng", "_max_coins", "_caches")

    def __init__(self, board: Board, rng: DeterministicRNG, max_coins_per_cache: int = 10) -> None:
        self._board = board
        self._rng = rng
        self._max_coins = max_coins_per_cache
        self._caches: dict[Cell, Geocache] = {}

    # -- generation --

    def initial_coin_count(self, cell: Cell) -> int:
        """Number of coins *cell* was minted with.

        Serials run ``0..floor(r * max)`` inclusive: one more coin than
        the floor alone, so a cache starts with between 1 and ``max`` coins.
        """
        r = self._rng.next_float(cell_seed(cell, Domain.INITIAL_VALUE))
        return math.floor(r * self._max_coins) + 1

    def _generate(self, cell: Cell) -> Geocache:
        cache = Geocache(cell)
        for serial in range(self.initial_coin_count(cell)):
            cache.add_coin(Coin(cell, serial))
        logger.debug("Generated cache at %s with %d coins", cell.key, len(cache))
        return cache

    def cache_for_cell(self, cell: Cell) -> Geocache:
        cell = self._board.canonical_cell(cell.i, cell.j)
        cache = self._caches.get(cell)
        if cache is None:
            cache = self._generate(cell)
            self._caches[cell] = cache
        return cache

    # -- queries --

    def has_cache(self, cell: Cell) -> bool:
        return cell in self._caches

    def discovered(self) -> Iterator[Geocache]:
        return iter(self._caches.values())

    def total_coins(self) -> int:
        return sum(len(c) for c in self._caches.values())

    def total_minted(self) -> int:
        """Coins minted by every discovered cell, re-derived from the RNG."""
        return sum(self.initial_coin_count(cell) for cell in self._caches)

    def __len__(self) -> int:
        return len(self._caches)

    # -- persistence --

    def serialize(self) -> dict[str, dict[str, Any]]:
        return dump_caches(self._caches.values())

    def deserialize(self, blob: Mapping[str, Any]) -> None:
        """Replace all caches with the contents of *blob*.

        The snapshot is parsed in full before anything is replaced, so a
        malformed blob raises :class:`SnapshotError` and leaves the store
        untouched.
        """
        parsed = parse_caches(self._board, blob)
        self._caches = {cell: Geocache(cell, coins) for cell, coins in parsed}
        logger.info("Restored %d caches", len(self._caches))

    def clear(self) -> None:
        self._caches.clear()
