"""geocoin: geospatial cache grid and deterministic cache-state engine."""

__version__ = "0.1.0"
