"""Cache inspection and coin transfers.

GET  /api/v1/caches/{i}/{j}
POST /api/v1/caches/{i}/{j}/take   body: CoinSchema
POST /api/v1/caches/{i}/{j}/place  body: CoinSchema
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from geocache.api.dependencies import get_session
from geocache.api.schemas import CacheSchema, CoinSchema, TransferResponse, cache_schema, coin_schema
from geocache.core.cache_store import Geocache
from geocache.engine.session import GameSession

router = APIRouter()


def _require_cache(session: GameSession, i: float, j: float) -> Geocache:
    cache = session.cache_at(i, j)
    if cache is None:
        raise HTTPException(status_code=404, detail=f"No cache at ({i}, {j}).")
    return cache


def _transfer_response(session: GameSession, cache: Geocache, message: str) -> TransferResponse:
    return TransferResponse(
        status="ok",
        message=message,
        cache=cache_schema(cache, session.board.cell_bounds(cache.cell)),
        inventory=[coin_schema(c) for c in session.inventory.coins],
    )


@router.get("/caches/{i}/{j}", response_model=CacheSchema)
def get_cache(i: float, j: float, session: GameSession = Depends(get_session)) -> CacheSchema:
    cache = _require_cache(session, i, j)
    return cache_schema(cache, session.board.cell_bounds(cache.cell))


@router.post("/caches/{i}/{j}/take", response_model=TransferResponse)
def take_coin(
    i: float,
    j: float,
    coin: CoinSchema,
    session: GameSession = Depends(get_session),
) -> TransferResponse:
    cache = _require_cache(session, i, j)
    if not session.take_coin(i, j, coin.coin_id()):
        raise HTTPException(status_code=409, detail="Coin is not in this cache.")
    return _transfer_response(session, cache, "Coin taken.")


@router.post("/caches/{i}/{j}/place", response_model=TransferResponse)
def place_coin(
    i: float,
    j: float,
    coin: CoinSchema,
    session: GameSession = Depends(get_session),
) -> TransferResponse:
    cache = _require_cache(session, i, j)
    if not session.place_coin(i, j, coin.coin_id()):
        raise HTTPException(status_code=409, detail="Coin is not in the inventory.")
    return _transfer_response(session, cache, "Coin placed.")
