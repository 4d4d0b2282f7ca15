"""GameSession: the single owner of all mutable game state.

Holds the board, cache store, inventory and player position, and writes
them through a :class:`Storage` backend. Every public operation runs
under one re-entrant lock, so API worker threads observe the same
one-event-at-a-time ordering as a single-threaded client.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from geocache.core.board import Board
from geocache.core.cache_store import CacheStore, Geocache
from geocache.core.enums import Direction
from geocache.core.ledger import Inventory
from geocache.core.models import DIRECTION_OFFSETS, Cell, Coin, CoinId, LatLng
from geocache.errors import SnapshotError, StorageError
from geocache.persistence.records import (
    dump_inventory,
    dump_position,
    ensure_unique,
    parse_inventory,
    parse_position,
)
from geocache.persistence.storage import MemoryStorage
from geocache.systems.rng import DeterministicRNG
from geocache.systems.spawner import is_spawn_cell, surfaced_cells

if TYPE_CHECKING:
    from geocache.config import GameConfig
    from geocache.persistence.storage import Storage

logger = logging.getLogger(__name__)

KEY_CACHES = "caches"
KEY_INVENTORY = "inventory"
KEY_POSITION = "position"


class GameSession:
    """Single-player game controller.

    Provides thread-safe access to:
      - player position (tile steps or geolocation fixes)
      - surfaced caches around the player
      - coin transfers between caches and the inventory
      - save / load / reset
    """

    def __init__(
        self,
        config: GameConfig,
        storage: Storage | None = None,
        rng: DeterministicRNG | None = None,
    ) -> None:
        self.config = config
        self._storage: Storage = storage if storage is not None else MemoryStorage()
        self._rng = rng if rng is not None else DeterministicRNG(config.world_seed)
        self._lock = threading.RLock()

        self.board: Board
        self.caches: CacheStore
        self.inventory: Inventory
        self._position: LatLng

        self._build()

    def _build(self) -> None:
        cfg = self.config
        self.board = Board(cfg.tile_degrees, cfg.coordinate_precision)
        self.caches = CacheStore(self.board, self._rng, cfg.max_coins_per_cache)
        self.inventory = Inventory()
        self._position = LatLng(cfg.start_lat, cfg.start_lng)

    # -- persistence --

    def load(self) -> bool:
        """Restore saved state. Returns False when starting fresh.

        A malformed snapshot is rejected as a whole: it is logged, the
        storage is cleared and the session starts from the beginning.
        """
        with self._lock:
            try:
                restored = self._restore()
            except SnapshotError as exc:
                logger.warning("Discarding saved game: %s", exc)
                self._build()
                self._storage.clear()
                return False
            if restored:
                logger.info(
                    "Loaded game at %s: %d caches, %d coins in inventory",
                    self._position, len(self.caches), len(self.inventory),
                )
            return restored

    def _restore(self) -> bool:
        position_blob = self._storage.get(KEY_POSITION)
        caches_blob = self._storage.get(KEY_CACHES)
        inventory_blob = self._storage.get(KEY_INVENTORY)
        if position_blob is None and caches_blob is None and inventory_blob is None:
            return False

        # Parse into fresh objects first; only swap in once everything validated.
        board = Board(self.config.tile_degrees, self.config.coordinate_precision)
        caches = CacheStore(board, self._rng, self.config.max_coins_per_cache)
        position = LatLng(self.config.start_lat, self.config.start_lng)
        inventory = Inventory()
        if position_blob is not None:
            position = parse_position(position_blob)
        if caches_blob is not None:
            caches.deserialize(caches_blob)
        if inventory_blob is not None:
            inventory.coins = parse_inventory(board, inventory_blob)
        held = [*inventory.coins, *(c for cache in caches.discovered() for c in cache.coins)]
        ensure_unique(held)
        self._check_minted(caches, held)

        self.board, self.caches, self.inventory, self._position = board, caches, inventory, position
        return True

    @staticmethod
    def _check_minted(caches: CacheStore, held: list[Coin]) -> None:
        """Every minted coin of every restored cell must be held exactly once.

        A coin whose origin has no cache record would be minted a second
        time when that cell is discovered again.
        """
        per_origin: dict[Cell, int] = {}
        for coin in held:
            if not caches.has_cache(coin.cell):
                raise SnapshotError(f"Coin {coin.label} comes from a cell with no saved cache")
            if coin.serial >= caches.initial_coin_count(coin.cell):
                raise SnapshotError(f"Coin {coin.label} was never minted")
            per_origin[coin.cell] = per_origin.get(coin.cell, 0) + 1
        for cache in caches.discovered():
            minted = caches.initial_coin_count(cache.cell)
            if per_origin.get(cache.cell, 0) != minted:
                raise SnapshotError(
                    f"Cell {cache.cell.key} minted {minted} coins but {per_origin.get(cache.cell, 0)} are held"
                )

    def save(self) -> None:
        with self._lock:
            self._storage.set_many({
                KEY_POSITION: dump_position(self._position),
                KEY_CACHES: self.caches.serialize(),
                KEY_INVENTORY: dump_inventory(self.inventory.coins),
            })

    def _save_transfer(self, cache: Geocache, cache_before: list[Coin], inventory_before: list[Coin]) -> None:
        # Cache and inventory land in one write so a reload never sees half a transfer.
        try:
            self._storage.set_many({
                KEY_CACHES: self.caches.serialize(),
                KEY_INVENTORY: dump_inventory(self.inventory.coins),
            })
        except StorageError:
            cache.coins[:] = cache_before
            self.inventory.coins[:] = inventory_before
            logger.warning("Save failed, transfer at %s rolled back", cache.cell.key)
            raise

    def reset(self) -> None:
        """Forget everything: storage, discovered caches, inventory, position."""
        with self._lock:
            self._storage.clear()
            self._build()
            logger.info("Game reset to %s", self._position)

    # -- movement --

    @property
    def position(self) -> LatLng:
        with self._lock:
            return self._position

    def set_position(self, lat: float, lng: float) -> LatLng:
        """Jump to a geolocation fix. The position only changes once it is saved."""
        with self._lock:
            target = LatLng(lat, lng)
            self._storage.set(KEY_POSITION, dump_position(target))
            self._position = target
            logger.debug("Player at %s", self._position)
            return self._position

    def move(self, direction: Direction) -> LatLng:
        """Step one tile in *direction*."""
        d_lat, d_lng = DIRECTION_OFFSETS[direction]
        step = self.config.tile_degrees
        with self._lock:
            target = self._position.offset(d_lat * step, d_lng * step)
            return self.set_position(target.lat, target.lng)

    def current_cell(self) -> Cell:
        with self._lock:
            return self.board.cell_for_point(self._position.lat, self._position.lng)

    # -- caches --

    def is_spawn_cell(self, cell: Cell) -> bool:
        return is_spawn_cell(self._rng, cell, self.config.spawn_probability)

    def visible_caches(self) -> list[Geocache]:
        """Caches of every surfaced cell within the visibility radius."""
        with self._lock:
            cells = surfaced_cells(
                self.board, self._rng, self._position,
                self.config.visibility_radius, self.config.spawn_probability,
            )
            return [self.caches.cache_for_cell(cell) for cell in cells]

    def cache_at(self, i: float, j: float) -> Geocache | None:
        """The cache at ``(i, j)``, or None if that cell does not spawn one."""
        with self._lock:
            cell = self.board.canonical_cell(i, j)
            if not self.is_spawn_cell(cell):
                return None
            return self.caches.cache_for_cell(cell)

    # -- transfers --

    def take_coin(self, i: float, j: float, coin_id: CoinId) -> bool:
        """Move the coin identified by *coin_id* from cache ``(i, j)`` to the inventory."""
        with self._lock:
            cache = self.cache_at(i, j)
            if cache is None:
                logger.warning("Take rejected: no cache at (%s, %s)", i, j)
                return False
            coin = cache.find(self._canonical_id(coin_id))
            if coin is None:
                logger.warning("Take rejected: coin %s is not in cache %s", coin_id, cache.cell.key)
                return False
            cache_before, inventory_before = list(cache.coins), list(self.inventory.coins)
            if not self.inventory.take(coin, cache):
                return False
            self._save_transfer(cache, cache_before, inventory_before)
            return True

    def place_coin(self, i: float, j: float, coin_id: CoinId) -> bool:
        """Move the coin identified by *coin_id* from the inventory into cache ``(i, j)``."""
        with self._lock:
            cache = self.cache_at(i, j)
            if cache is None:
                logger.warning("Place rejected: no cache at (%s, %s)", i, j)
                return False
            coin = self.inventory.find(self._canonical_id(coin_id))
            if coin is None:
                logger.warning("Place rejected: coin %s is not in the inventory", coin_id)
                return False
            cache_before, inventory_before = list(cache.coins), list(self.inventory.coins)
            if not self.inventory.place(coin, cache):
                return False
            self._save_transfer(cache, cache_before, inventory_before)
            return True

    def _canonical_id(self, coin_id: CoinId) -> CoinId:
        ci, cj, serial = coin_id
        cell = self.board.canonical_cell(ci, cj)
        return (cell.i, cell.j, int(serial))

    # -- accounting --

    def total_minted(self) -> int:
        with self._lock:
            return self.caches.total_minted()

    def total_held(self) -> int:
        with self._lock:
            return self.caches.total_coins() + len(self.inventory)
