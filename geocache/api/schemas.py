"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from geocache.core.cache_store import Geocache
from geocache.core.models import Bounds, Cell, Coin, CoinId, LatLng


class CellSchema(BaseModel):
    i: float
    j: float


class LatLngSchema(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class BoundsSchema(BaseModel):
    southwest: LatLngSchema
    northeast: LatLngSchema


class CoinSchema(BaseModel):
    cell: CellSchema
    serial: int = Field(ge=0)
    label: str = ""

    def coin_id(self) -> CoinId:
        return (self.cell.i, self.cell.j, self.serial)


class CacheSchema(BaseModel):
    cell: CellSchema
    bounds: BoundsSchema
    coins: list[CoinSchema] = []


class WorldStateResponse(BaseModel):
    position: LatLngSchema
    cell: CellSchema
    inventory: list[CoinSchema] = []
    caches: list[CacheSchema] = []
    total_minted: int = 0
    total_held: int = 0


class TransferResponse(BaseModel):
    status: str
    message: str
    cache: CacheSchema
    inventory: list[CoinSchema] = []


class ControlResponse(BaseModel):
    status: str
    message: str
    position: LatLngSchema


class GameConfigResponse(BaseModel):
    tile_degrees: float
    coordinate_precision: int
    visibility_radius: int
    spawn_probability: float
    max_coins_per_cache: int
    start_lat: float
    start_lng: float


# -- converters --

def cell_schema(cell: Cell) -> CellSchema:
    return CellSchema(i=cell.i, j=cell.j)


def latlng_schema(point: LatLng) -> LatLngSchema:
    return LatLngSchema(lat=point.lat, lng=point.lng)


def bounds_schema(bounds: Bounds) -> BoundsSchema:
    return BoundsSchema(southwest=latlng_schema(bounds.southwest), northeast=latlng_schema(bounds.northeast))


def coin_schema(coin: Coin) -> CoinSchema:
    return CoinSchema(cell=cell_schema(coin.cell), serial=coin.serial, label=coin.label)


def cache_schema(cache: Geocache, bounds: Bounds) -> CacheSchema:
    return CacheSchema(
        cell=cell_schema(cache.cell),
        bounds=bounds_schema(bounds),
        coins=[coin_schema(c) for c in cache.coins],
    )
