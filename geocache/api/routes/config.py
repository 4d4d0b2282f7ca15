"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocache.api.dependencies import get_session
from geocache.api.schemas import GameConfigResponse
from geocache.engine.session import GameSession

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(session: GameSession = Depends(get_session)) -> GameConfigResponse:
    cfg = session.config
    return GameConfigResponse(
        tile_degrees=cfg.tile_degrees,
        coordinate_precision=cfg.coordinate_precision,
        visibility_radius=cfg.visibility_radius,
        spawn_probability=cfg.spawn_probability,
        max_coins_per_cache=cfg.max_coins_per_cache,
        start_lat=cfg.start_lat,
        start_lng=cfg.start_lng,
    )
