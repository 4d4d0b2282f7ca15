"""Tests for the coin transfer protocol and token conservation."""

import random

import pytest

from geocache.core.board import Board
from geocache.core.cache_store import CacheStore
from geocache.core.ledger import Inventory
from geocache.core.models import Cell, Coin
from tests.helpers.fixed_rng import FixedRNG


@pytest.fixture
def world():
    board = Board()
    store = CacheStore(board, FixedRNG(0.35), 10)
    a = store.cache_for_cell(board.cell_for_point(36.9995, -122.0533))
    b = store.cache_for_cell(board.cell_for_point(36.9996, -122.0533))
    return store, a, b, Inventory()


class TestTake:

    def test_take_moves_coin(self, world):
        _, a, _, inv = world
        coin = a.coins[1]
        assert inv.take(coin, a)
        assert coin not in a
        assert inv.coins == [coin]

    def test_take_by_equal_copy(self, world):
        """Presence is by identity tuple, not by object."""
        _, a, _, inv = world
        copy = Coin(Cell(36.9995, -122.0533), 2)
        assert inv.take(copy, a)
        assert [c.serial for c in a.coins] == [0, 1, 3]

    def test_take_missing_is_noop(self, world, caplog):
        _, a, b, inv = world
        foreign = b.coins[0]
        before = list(a.coins)
        assert not inv.take(foreign, a)
        assert a.coins == before
        assert len(inv) == 0
        assert "Take rejected" in caplog.text

    def test_take_twice_fails_second_time(self, world):
        _, a, _, inv = world
        coin = a.coins[0]
        assert inv.take(coin, a)
        assert not inv.take(coin, a)
        assert inv.coins == [coin]


class TestPlace:

    def test_place_appends_to_cache(self, world):
        _, a, b, inv = world
        coin = a.coins[0]
        inv.take(coin, a)
        assert inv.place(coin, b)
        assert b.coins[-1] == coin
        assert len(inv) == 0

    def test_place_missing_is_noop(self, world, caplog):
        _, a, _, inv = world
        before = list(a.coins)
        assert not inv.place(a.coins[0], a)
        assert a.coins == before
        assert "Place rejected" in caplog.text


class TestRoundTrip:

    def test_take_then_place_restores_set(self, world):
        _, a, _, inv = world
        before = list(a.coins)
        coin = a.coins[1]
        inv.take(coin, a)
        inv.place(coin, a)
        assert set(a.coins) == set(before)
        # Order contract: the returned coin goes to the end.
        assert a.coins == [before[0], before[2], before[3], before[1]]

    def test_round_trip_of_last_coin_restores_order(self, world):
        _, a, _, inv = world
        before = list(a.coins)
        inv.take(a.coins[-1], a)
        inv.place(before[-1], a)
        assert a.coins == before


class TestConservation:

    def test_random_transfers_conserve_coins(self, world):
        store, a, b, inv = world
        minted = store.total_minted()
        rnd = random.Random(1234)
        caches = [a, b]
        for _ in range(300):
            cache = rnd.choice(caches)
            if inv.coins and rnd.random() < 0.5:
                inv.place(rnd.choice(inv.coins), cache)
            elif cache.coins:
                inv.take(rnd.choice(cache.coins), cache)
            else:
                # Deliberate desync: a coin the cache does not hold.
                inv.take(Coin(cache.cell, 99), cache)
            everywhere = [*a.coins, *b.coins, *inv.coins]
            assert len(everywhere) == minted
            assert len(set(everywhere)) == minted
