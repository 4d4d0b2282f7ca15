"""GET /api/v1/state: player, inventory and surfaced caches (polled by the map)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocache.api.dependencies import get_session
from geocache.api.schemas import (
    WorldStateResponse,
    cache_schema,
    cell_schema,
    coin_schema,
    latlng_schema,
)
from geocache.engine.session import GameSession

router = APIRouter()


@router.get("/state", response_model=WorldStateResponse)
def get_state(session: GameSession = Depends(get_session)) -> WorldStateResponse:
    caches = session.visible_caches()
    return WorldStateResponse(
        position=latlng_schema(session.position),
        cell=cell_schema(session.current_cell()),
        inventory=[coin_schema(c) for c in list(session.inventory.coins)],
        caches=[cache_schema(c, session.board.cell_bounds(c.cell)) for c in caches],
        total_minted=session.total_minted(),
        total_held=session.total_held(),
    )
