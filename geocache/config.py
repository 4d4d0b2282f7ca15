"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration, fixed when the session is built."""

    # World
    world_seed: int = 0
    tile_degrees: float = 1e-4
    coordinate_precision: int = 4

    # Scanning
    visibility_radius: int = 8             # cells scanned per axis around the player
    spawn_probability: float = 0.1

    # Caches
    max_coins_per_cache: int = 10

    # Player start (Merrill College classroom)
    start_lat: float = 36.9995
    start_lng: float = -122.0533

    # Persistence
    save_file: str = "geocache_save.json"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None
