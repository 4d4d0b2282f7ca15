"""Exception types raised by the engine."""

from __future__ import annotations


class GeocacheError(Exception):
    """Base class for engine errors."""


class SnapshotError(GeocacheError):
    """Persisted state is malformed and cannot be restored."""


class StorageError(GeocacheError):
    """The persistence backend failed to read or write."""
