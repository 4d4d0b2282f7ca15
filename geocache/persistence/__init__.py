"""Persistence: record format and key/value storage backends."""

from geocache.persistence.storage import JsonFileStorage, MemoryStorage, Storage

__all__ = ["JsonFileStorage", "MemoryStorage", "Storage"]
