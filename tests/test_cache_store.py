"""Tests for cache generation: generate-once, counts, serials, origins."""

import pytest

from geocache.core.board import Board
from geocache.core.cache_store import CacheStore, Geocache
from geocache.core.models import Coin
from geocache.systems.rng import DeterministicRNG
from tests.helpers.fixed_rng import FixedRNG

SEED = "36.9995,-122.0533,initialValue"


def _store(rng, max_coins: int = 10) -> tuple[Board, CacheStore]:
    board = Board(tile_degrees=1e-4, precision=4)
    return board, CacheStore(board, rng, max_coins)


class TestGeneration:

    def test_reference_scenario(self):
        """r = 0.35, MAX = 10 -> serials 0..3, all minted at the cell."""
        board, store = _store(FixedRNG(values={SEED: 0.35}))
        cell = board.cell_for_point(36.9995, -122.0533)
        cache = store.cache_for_cell(cell)
        assert [c.serial for c in cache.coins] == [0, 1, 2, 3]
        assert all(c.cell is cell for c in cache.coins)
        assert all(c.coin_id == (36.9995, -122.0533, c.serial) for c in cache.coins)

    def test_generation_seed_uses_initial_value_suffix(self):
        rng = FixedRNG(0.5)
        board, store = _store(rng)
        store.cache_for_cell(board.cell_for_point(36.9995, -122.0533))
        assert rng.calls == [SEED]

    @pytest.mark.parametrize(
        "r, expected",
        [(0.0, 1), (0.09, 1), (0.1, 2), (0.35, 4), (0.999, 10)],
    )
    def test_count_is_floor_plus_one(self, r, expected):
        """The upper serial bound is inclusive: floor(r * MAX) + 1 coins."""
        board, store = _store(FixedRNG(r))
        cache = store.cache_for_cell(board.cell_for_point(1.0, 1.0))
        assert len(cache) == expected
        assert store.initial_coin_count(cache.cell) == expected

    def test_counts_stay_within_limits_for_real_rng(self):
        board, store = _store(DeterministicRNG(), max_coins=10)
        for k in range(200):
            cache = store.cache_for_cell(board.cell_for_point(k * 1e-4, 0.0))
            assert 1 <= len(cache) <= 10


class TestGenerateOnce:

    def test_same_object_returned(self):
        board, store = _store(DeterministicRNG())
        cell = board.cell_for_point(36.9995, -122.0533)
        assert store.cache_for_cell(cell) is store.cache_for_cell(cell)

    def test_rng_consulted_once(self):
        rng = FixedRNG(0.5)
        board, store = _store(rng)
        cell = board.cell_for_point(36.9995, -122.0533)
        for _ in range(5):
            store.cache_for_cell(cell)
        assert rng.calls.count(SEED) == 1

    def test_mutations_survive_lookup(self):
        board, store = _store(FixedRNG(0.35))
        cell = board.cell_for_point(36.9995, -122.0533)
        store.cache_for_cell(cell).remove_coin(Coin(cell, 0))
        assert [c.serial for c in store.cache_for_cell(cell).coins] == [1, 2, 3]

    def test_non_canonical_cell_argument(self):
        """A value-equal Cell built outside the board resolves to the stored cache."""
        from geocache.core.models import Cell

        board, store = _store(DeterministicRNG())
        cell = board.cell_for_point(36.9995, -122.0533)
        assert store.cache_for_cell(Cell(36.9995, -122.0533)) is store.cache_for_cell(cell)
        assert store.cache_for_cell(Cell(36.9995, -122.0533)).cell is cell

    def test_same_world_on_rebuild(self):
        _, a = _store(DeterministicRNG(3))
        board_b, b = _store(DeterministicRNG(3))
        for k in range(30):
            ca = a.cache_for_cell(a._board.cell_for_point(k * 1e-4, 5.0))
            cb = b.cache_for_cell(board_b.cell_for_point(k * 1e-4, 5.0))
            assert ca.coins == cb.coins


class TestAccounting:

    def test_totals(self):
        board, store = _store(FixedRNG(0.35))
        store.cache_for_cell(board.cell_for_point(0.0, 0.0))
        store.cache_for_cell(board.cell_for_point(0.0, 1e-4))
        assert len(store) == 2
        assert store.total_coins() == 8
        assert store.total_minted() == 8

    def test_has_cache(self):
        board, store = _store(FixedRNG(0.0))
        cell = board.cell_for_point(0.0, 0.0)
        assert not store.has_cache(cell)
        store.cache_for_cell(cell)
        assert store.has_cache(cell)


class TestGeocache:

    def test_find_by_identity(self):
        board = Board()
        cell = board.cell_for_point(1.0, 2.0)
        cache = Geocache(cell, [Coin(cell, 0), Coin(cell, 1)])
        assert cache.find((1.0, 2.0, 1)) is cache.coins[1]
        assert cache.find((1.0, 2.0, 9)) is None

    def test_remove_missing_coin(self):
        cell = Board().cell_for_point(1.0, 2.0)
        cache = Geocache(cell, [Coin(cell, 0)])
        assert not cache.remove_coin(Coin(cell, 5))
        assert len(cache) == 1
