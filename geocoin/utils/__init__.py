"""Logging setup and the session event feed."""
