"""Core data models and the grid index."""

from geocache.core.enums import Direction, Domain
from geocache.core.models import Bounds, Cell, Coin, LatLng
from geocache.core.board import Board
from geocache.core.ledger import Inventory

__all__ = [
    "Board",
    "Bounds",
    "Cell",
    "Coin",
    "Direction",
    "Domain",
    "Inventory",
    "LatLng",
]
