"""Stable JSON record format for cells, coins, caches and position.

Layout::

    caches:    {"i,j": {"cell": {"i", "j"}, "cacheCoins": [CoinRecord, ...]}}
    inventory: [{"cell": {"i", "j"}, "serial": "n"}, ...]
    position:  {"lat", "lng"}

Parsing validates every record with pydantic and funnels all cells
through the :class:`Board`, so restored cells are the interned ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from pydantic import BaseModel, Field, ValidationError

from geocache.core.models import Cell, Coin, LatLng
from geocache.errors import SnapshotError

if TYPE_CHECKING:
    from geocache.core.board import Board
    from geocache.core.cache_store import Geocache


class CellRecord(BaseModel):
    i: float = Field(allow_inf_nan=False)
    j: float = Field(allow_inf_nan=False)


class CoinRecord(BaseModel):
    cell: CellRecord
    serial: str = Field(pattern=r"^\d+$")


class CacheRecord(BaseModel):
    cell: CellRecord
    cache_coins: list[CoinRecord] = Field(alias="cacheCoins")

    class Config:
        populate_by_name = True


class PositionRecord(BaseModel):
    lat: float = Field(allow_inf_nan=False)
    lng: float = Field(allow_inf_nan=False)


# ---------------------------------------------------------------------------
# Dumping
# ---------------------------------------------------------------------------

def dump_cell(cell: Cell) -> dict[str, float]:
    return {"i": cell.i, "j": cell.j}


def dump_coin(coin: Coin) -> dict[str, Any]:
    return {"cell": dump_cell(coin.cell), "serial": str(coin.serial)}


def dump_cache(cache: Geocache) -> dict[str, Any]:
    return {"cell": dump_cell(cache.cell), "cacheCoins": [dump_coin(c) for c in cache.coins]}


def dump_caches(caches: Iterable[Geocache]) -> dict[str, dict[str, Any]]:
    return {cache.cell.key: dump_cache(cache) for cache in caches}


def dump_inventory(coins: Iterable[Coin]) -> list[dict[str, Any]]:
    return [dump_coin(c) for c in coins]


def dump_position(point: LatLng) -> dict[str, float]:
    return {"lat": point.lat, "lng": point.lng}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _validate(model: type[BaseModel], raw: Any, where: str) -> Any:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotError(f"Malformed {where}: {exc.error_count()} validation error(s)") from exc


def _cell(board: Board, record: CellRecord, where: str) -> Cell:
    if not board.is_canonical(record.i, record.j):
        raise SnapshotError(f"Non-canonical cell ({record.i}, {record.j}) in {where}")
    return board.canonical_cell(record.i, record.j)


def _coin(board: Board, record: CoinRecord, where: str) -> Coin:
    return Coin(_cell(board, record.cell, where), int(record.serial))


def ensure_unique(coins: Iterable[Coin]) -> None:
    """Raise if any coin identity appears more than once."""
    seen: set[Coin] = set()
    for coin in coins:
        if coin in seen:
            raise SnapshotError(f"Coin {coin.label} appears in more than one place")
        seen.add(coin)


def parse_caches(board: Board, blob: Any) -> list[tuple[Cell, list[Coin]]]:
    """Parse a ``caches`` blob into ``(cell, coins)`` pairs in stored order."""
    if not isinstance(blob, Mapping):
        raise SnapshotError("Malformed caches: expected an object keyed by cell")
    result: list[tuple[Cell, list[Coin]]] = []
    for key, raw in blob.items():
        where = f"cache {key!r}"
        record: CacheRecord = _validate(CacheRecord, raw, where)
        cell = _cell(board, record.cell, where)
        if cell.key != key:
            raise SnapshotError(f"Cache key {key!r} does not match its cell {cell.key!r}")
        coins = [_coin(board, c, where) for c in record.cache_coins]
        result.append((cell, coins))
    ensure_unique(coin for _, coins in result for coin in coins)
    return result


def parse_inventory(board: Board, blob: Any) -> list[Coin]:
    if not isinstance(blob, list):
        raise SnapshotError("Malformed inventory: expected a list of coins")
    coins = [_coin(board, _validate(CoinRecord, raw, "inventory"), "inventory") for raw in blob]
    ensure_unique(coins)
    return coins


def parse_position(blob: Any) -> LatLng:
    record: PositionRecord = _validate(PositionRecord, blob, "position")
    return LatLng(record.lat, record.lng)
