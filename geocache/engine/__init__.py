"""Game session controller."""

from geocache.engine.session import GameSession

__all__ = ["GameSession"]
