"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions for one-tile player steps."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class Domain(IntEnum):
    """RNG seed domains. Each domain derives its seed string differently."""

    SPAWN = 0
    INITIAL_VALUE = 1
