"""Deterministic location-based geocache world engine."""

__version__ = "0.1.0"
