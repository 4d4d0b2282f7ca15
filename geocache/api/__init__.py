"""Local HTTP API consumed by the map client."""
