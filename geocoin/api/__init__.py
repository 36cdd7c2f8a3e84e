"""HTTP API for the map UI."""
