"""Player movement and game lifecycle.

POST /api/v1/move/{direction}
POST /api/v1/position   body: LatLngSchema (geolocation fix)
POST /api/v1/reset
"""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocache.api.dependencies import get_session
from geocache.api.schemas import ControlResponse, LatLngSchema, latlng_schema
from geocache.core.enums import Direction
from geocache.engine.session import GameSession

router = APIRouter()


class MoveDirection(str, Enum):
    north = "north"
    east = "east"
    south = "south"
    west = "west"


@router.post("/move/{direction}", response_model=ControlResponse)
def move(
    direction: MoveDirection,
    session: GameSession = Depends(get_session),
) -> ControlResponse:
    position = session.move(Direction[direction.name.upper()])
    return ControlResponse(status="ok", message=f"Moved {direction.value}.", position=latlng_schema(position))


@router.post("/position", response_model=ControlResponse)
def set_position(
    fix: LatLngSchema,
    session: GameSession = Depends(get_session),
) -> ControlResponse:
    position = session.set_position(fix.lat, fix.lng)
    return ControlResponse(status="ok", message="Position updated.", position=latlng_schema(position))


@router.post("/reset", response_model=ControlResponse)
def reset(session: GameSession = Depends(get_session)) -> ControlResponse:
    session.reset()
    return ControlResponse(status="ok", message="All data reset.", position=latlng_schema(session.position))
